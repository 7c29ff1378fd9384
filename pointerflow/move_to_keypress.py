"""Behavior that turns accumulated pointer motion into directional key taps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pointerflow.core import (
    Behavior,
    BehaviorResult,
    Binding,
    BindingEvent,
    EventType,
    RelCode,
    Runtime,
)

RELEASE_DELAY_MS = 10


def _int16(value: int) -> int:
    return (value + 0x8000) % 0x10000 - 0x8000


class _Mode(Enum):
    NONE = 0
    REL = 1


@dataclass
class MoveToKeypressConfig:
    """Thresholds and the four bindings, ordered right, left, up, down.

    The per-axis thresholds fall back to ``threshold`` when left unset.
    """

    threshold: int
    bindings: tuple[Binding, Binding, Binding, Binding]
    x_threshold: int | None = None
    y_threshold: int | None = None
    rate_limit_ms: int = 50
    x_invert: bool = False
    y_invert: bool = False
    reset_other_axis: bool = False

    def __post_init__(self) -> None:
        self.bindings = tuple(self.bindings)
        if len(self.bindings) != 4:
            raise ValueError("exactly four bindings are required: right, left, up, down")
        if self.x_threshold is None:
            self.x_threshold = self.threshold
        if self.y_threshold is None:
            self.y_threshold = self.threshold

    @property
    def right(self) -> Binding:
        return self.bindings[0]

    @property
    def left(self) -> Binding:
        return self.bindings[1]

    @property
    def up(self) -> Binding:
        return self.bindings[2]

    @property
    def down(self) -> Binding:
        return self.bindings[3]


@dataclass
class _Motion:
    mode: _Mode = _Mode.NONE
    x_delta: int = 0
    y_delta: int = 0


class MoveToKeypressBehavior(Behavior):
    """Swallow relative motion and tap a direction key each time a threshold is crossed."""

    def __init__(self, runtime: Runtime, config: MoveToKeypressConfig) -> None:
        self._runtime = runtime
        self.config = config
        self._motion = _Motion()
        self.last_trigger_time = 0
        self.work_scheduled = False
        self.active_layer = 0
        self.current_binding: Binding | None = None
        self.current_event: BindingEvent | None = None

    @property
    def x_delta(self) -> int:
        return self._motion.x_delta

    @property
    def y_delta(self) -> int:
        return self._motion.y_delta

    def _accumulate(self, code: int, value: int) -> None:
        cfg = self.config
        motion = self._motion
        if code == RelCode.X:
            motion.mode = _Mode.REL
            step = _int16(-value if cfg.x_invert else value)
            motion.x_delta = _int16(motion.x_delta + step)
        elif code == RelCode.Y:
            motion.mode = _Mode.REL
            step = _int16(-value if cfg.y_invert else value)
            motion.y_delta = _int16(motion.y_delta + step)

        x_max = _int16(cfg.x_threshold * 3)
        y_max = _int16(cfg.y_threshold * 3)
        motion.x_delta = max(-x_max, min(motion.x_delta, x_max))
        motion.y_delta = max(-y_max, min(motion.y_delta, y_max))

    def _pick_direction(self) -> Binding | None:
        cfg = self.config
        motion = self._motion
        if motion.x_delta >= cfg.x_threshold:
            motion.x_delta = _int16(motion.x_delta - cfg.x_threshold)
            if cfg.reset_other_axis:
                motion.y_delta = 0
            return cfg.right
        if motion.x_delta <= -cfg.x_threshold:
            motion.x_delta = _int16(motion.x_delta + cfg.x_threshold)
            if cfg.reset_other_axis:
                motion.y_delta = 0
            return cfg.left
        if motion.y_delta >= cfg.y_threshold:
            motion.y_delta = _int16(motion.y_delta - cfg.y_threshold)
            if cfg.reset_other_axis:
                motion.x_delta = 0
            return cfg.down
        if motion.y_delta <= -cfg.y_threshold:
            motion.y_delta = _int16(motion.y_delta + cfg.y_threshold)
            if cfg.reset_other_axis:
                motion.x_delta = 0
            return cfg.up
        return None

    def _check_and_schedule(self, original_event: BindingEvent) -> None:
        binding = self._pick_direction()
        if binding is None:
            return
        self.current_binding = binding
        self.current_event = original_event
        if self.work_scheduled:
            return
        self.work_scheduled = True
        scheduler = self._runtime.scheduler
        self.last_trigger_time = scheduler.now()
        scheduler.schedule((self, "press"), 0, self._press)
        scheduler.schedule((self, "release"), RELEASE_DELAY_MS, self._release)

    def _target(self) -> Behavior | None:
        if not self._runtime.keymap.layer_active(self.active_layer):
            return None
        if self.current_binding is None:
            return None
        return self._runtime.get_behavior(self.current_binding.behavior_dev)

    def _press(self) -> None:
        target = self._target()
        if target is None:
            self.work_scheduled = False
            return
        target.binding_pressed(self.current_binding, self.current_event)

    def _release(self) -> None:
        target = self._target()
        if target is None:
            self.work_scheduled = False
            return
        target.binding_released(self.current_binding, self.current_event)
        self.work_scheduled = False

    def binding_pressed(self, binding: Binding, event: BindingEvent) -> BehaviorResult:
        evt = event.input_event
        if evt is None:
            raise ValueError("binding event carries no input event")
        if evt.type != EventType.REL or not evt.value:
            return BehaviorResult.TRANSPARENT

        now = self._runtime.scheduler.now()
        if now - self.last_trigger_time < self.config.rate_limit_ms:
            evt.value = 0
            return BehaviorResult.OPAQUE

        self.active_layer = event.layer
        self._accumulate(evt.code, evt.value)

        if self._motion.mode is _Mode.REL:
            self._check_and_schedule(event)
            evt.value = 0
            return BehaviorResult.OPAQUE
        return BehaviorResult.TRANSPARENT