"""Input listener that filters raw pointer events through behaviors into mouse reports."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from pointerflow.core import (
    BTN_0,
    BTN_8,
    BehaviorResult,
    Binding,
    BindingEvent,
    EventType,
    InputEvent,
    RelCode,
    Runtime,
)

_log = logging.getLogger(__name__)

MOUSE_BUTTON_COUNT = 5

_SWAPPED_CODES = {
    RelCode.X: RelCode.Y,
    RelCode.Y: RelCode.X,
    RelCode.WHEEL: RelCode.HWHEEL,
    RelCode.HWHEEL: RelCode.WHEEL,
}


def _int16(value: int) -> int:
    return (value + 0x8000) % 0x10000 - 0x8000


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


@dataclass(frozen=True)
class MouseReport:
    """One mouse report as sent to the host."""

    buttons: frozenset[int]
    x: int
    y: int
    scroll_x: int
    scroll_y: int


@dataclass
class MouseHid:
    """Mouse HID state; every sent report is kept in ``reports``."""

    movement: tuple[int, int] = (0, 0)
    scroll: tuple[int, int] = (0, 0)
    buttons: set[int] = field(default_factory=set)
    reports: list[MouseReport] = field(default_factory=list)

    def set_scroll(self, x: int, y: int) -> None:
        self.scroll = (x, y)

    def set_movement(self, x: int, y: int) -> None:
        self.movement = (x, y)

    def press_button(self, button: int) -> None:
        if not 0 <= button < MOUSE_BUTTON_COUNT:
            raise ValueError(f"button {button} out of range")
        self.buttons.add(button)

    def release_button(self, button: int) -> None:
        if not 0 <= button < MOUSE_BUTTON_COUNT:
            raise ValueError(f"button {button} out of range")
        self.buttons.discard(button)

    def send_report(self) -> MouseReport:
        report = MouseReport(
            buttons=frozenset(self.buttons),
            x=self.movement[0],
            y=self.movement[1],
            scroll_x=self.scroll[0],
            scroll_y=self.scroll[1],
        )
        self.reports.append(report)
        return report


@dataclass
class ListenerConfig:
    """How a listener rewrites events and which behaviors it routes them through.

    A negative ``evt_type``, ``x_input_code`` or ``y_input_code`` disables code remapping.
    """

    layers: tuple[int, ...] = (0,)
    bindings: tuple[Binding, ...] = ()
    xy_swap: bool = False
    x_invert: bool = False
    y_invert: bool = False
    scale_multiplier: int = 1
    scale_divisor: int = 1
    rotate_deg: int = 0
    evt_type: int = -1
    x_input_code: int = -1
    y_input_code: int = -1

    def __post_init__(self) -> None:
        self.layers = tuple(self.layers)
        self.bindings = tuple(self.bindings)
        if self.scale_divisor == 0:
            raise ValueError("scale_divisor must not be zero")


class _Mode(Enum):
    NONE = 0
    REL = 1


@dataclass
class _Axes:
    mode: _Mode = _Mode.NONE
    x: int = 0
    y: int = 0

    def clear(self) -> None:
        self.mode = _Mode.NONE
        self.x = self.y = 0


def _is_x_data(evt: InputEvent) -> bool:
    return evt.type == EventType.REL and evt.code in (RelCode.X, RelCode.HWHEEL)


def _is_y_data(evt: InputEvent) -> bool:
    return evt.type == EventType.REL and evt.code in (RelCode.Y, RelCode.WHEEL)


class InputListener:
    """Listens to one input device and turns its events into mouse reports."""

    def __init__(
        self, runtime: Runtime, config: ListenerConfig, hid: MouseHid | None = None
    ) -> None:
        self._runtime = runtime
        self.config = config
        self.hid = hid if hid is not None else MouseHid()
        angle = math.radians(config.rotate_deg)
        self._sin = math.sin(angle)
        self._cos = math.cos(angle)
        self._motion = _Axes()
        self._wheel = _Axes()
        self._button_set = 0
        self._button_clear = 0

    def intercept(self, event: InputEvent) -> bool:
        """Rewrite the event in place and run it through the bindings.

        Return whether the event should still reach the mouse report.
        """
        cfg = self.config
        if not event.device:
            return False

        layer = self._runtime.keymap.highest_layer_active()
        if layer not in cfg.layers:
            return False

        if cfg.evt_type >= 0 and event.type == cfg.evt_type:
            if event.code in (RelCode.X, RelCode.HWHEEL):
                if cfg.x_input_code >= 0:
                    event.code = cfg.x_input_code
            elif event.code in (RelCode.Y, RelCode.WHEEL):
                if cfg.y_input_code >= 0:
                    event.code = cfg.y_input_code

        if cfg.xy_swap:
            event.code = _SWAPPED_CODES.get(event.code, event.code)

        if (cfg.x_invert and _is_x_data(event)) or (cfg.y_invert and _is_y_data(event)):
            event.value = -event.value

        event.value = _int16(_trunc_div(event.value * cfg.scale_multiplier, cfg.scale_divisor))

        for binding in cfg.bindings:
            behavior = self._runtime.get_behavior(binding.behavior_dev)
            if behavior is None:
                _log.warning("No behavior assigned to %s on layer %d", event.device, layer)
                continue

            binding_event = BindingEvent(
                layer=layer,
                timestamp=self._runtime.scheduler.now(),
                input_event=event,
            )
            state = True
            if event.type == EventType.KEY and BTN_0 <= event.code <= BTN_8:
                state = event.value > 0

            if state:
                result = behavior.binding_pressed(binding, binding_event)
            else:
                result = behavior.binding_released(binding, binding_event)

            if result == BehaviorResult.OPAQUE:
                return False
        return True

    def _handle_rel(self, event: InputEvent) -> None:
        if event.code == RelCode.X:
            self._motion.mode = _Mode.REL
            self._motion.x = _int16(self._motion.x + event.value)
        elif event.code == RelCode.Y:
            self._motion.mode = _Mode.REL
            self._motion.y = _int16(self._motion.y + event.value)
        elif event.code == RelCode.WHEEL:
            self._wheel.mode = _Mode.REL
            self._wheel.y = _int16(self._wheel.y + event.value)
        elif event.code == RelCode.HWHEEL:
            self._wheel.mode = _Mode.REL
            self._wheel.x = _int16(self._wheel.x + event.value)

    def _handle_key(self, event: InputEvent) -> None:
        if BTN_0 <= event.code < BTN_0 + MOUSE_BUTTON_COUNT:
            bit = 1 << (event.code - BTN_0)
            if event.value > 0:
                self._button_set |= bit
            else:
                self._button_clear |= bit

    def _rotate(self, axes: _Axes) -> None:
        if self.config.rotate_deg > 0:
            x, y = float(axes.x), float(axes.y)
            axes.x = _int16(int(self._cos * x - self._sin * y))
            axes.y = _int16(int(self._sin * x + self._cos * y))

    def handle(self, event: InputEvent) -> None:
        """Process one event; on a sync event, emit a mouse report and reset."""
        if not self.intercept(event):
            return

        if event.type == EventType.REL:
            self._handle_rel(event)
        elif event.type == EventType.KEY:
            self._handle_key(event)

        if not event.sync:
            return

        hid = self.hid
        if self._wheel.mode is _Mode.REL:
            self._rotate(self._wheel)
            hid.set_scroll(self._wheel.x, self._wheel.y)
        if self._motion.mode is _Mode.REL:
            self._rotate(self._motion)
            hid.set_movement(self._motion.x, self._motion.y)

        for button in range(MOUSE_BUTTON_COUNT):
            if self._button_set & (1 << button):
                hid.press_button(button)
        for button in range(MOUSE_BUTTON_COUNT):
            if self._button_clear & (1 << button):
                hid.release_button(button)

        hid.send_report()
        hid.set_scroll(0, 0)
        hid.set_movement(0, 0)

        self._motion.clear()
        self._wheel.clear()
        self._button_set = self._button_clear = 0