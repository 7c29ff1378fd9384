"""Shared input event types, keymap layer state and a deterministic work scheduler."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Hashable

BTN_0 = 0x100
BTN_8 = 0x108


class EventType(IntEnum):
    """Input event types."""

    KEY = 0x01
    REL = 0x02
    ABS = 0x03


class RelCode(IntEnum):
    """Relative axis codes."""

    X = 0x00
    Y = 0x01
    Z = 0x02
    RX = 0x03
    RY = 0x04
    RZ = 0x05
    HWHEEL = 0x06
    DIAL = 0x07
    WHEEL = 0x08
    MISC = 0x09


class BehaviorResult(IntEnum):
    """What a behavior reports back after handling an event."""

    OPAQUE = 0
    TRANSPARENT = 1


@dataclass
class InputEvent:
    """A single input report; behaviors may rewrite code and value in place."""

    type: int
    code: int
    value: int
    sync: bool = False
    device: str | None = None


@dataclass(frozen=True)
class Binding:
    """A reference to a registered behavior plus its two parameters."""

    behavior_dev: str
    param1: int = 0
    param2: int = 0


@dataclass
class BindingEvent:
    """Context handed to a behavior when one of its bindings fires."""

    layer: int
    timestamp: int = 0
    input_event: InputEvent | None = None


class Behavior:
    """Base class of behaviors; unhandled callbacks let events pass through."""

    def binding_pressed(self, binding: Binding, event: BindingEvent) -> BehaviorResult:
        return BehaviorResult.TRANSPARENT

    def binding_released(self, binding: Binding, event: BindingEvent) -> BehaviorResult:
        return BehaviorResult.TRANSPARENT


class Keymap:
    """Tracks which keymap layers are active; the default layer is always on."""

    def __init__(self, layer_count: int = 32, default_layer: int = 0) -> None:
        if layer_count <= 0:
            raise ValueError("layer_count must be positive")
        if not 0 <= default_layer < layer_count:
            raise ValueError(f"default layer {default_layer} out of range")
        self.layer_count = layer_count
        self.default_layer = default_layer
        self._active = {default_layer}

    def _check(self, layer: int) -> None:
        if not 0 <= layer < self.layer_count:
            raise ValueError(f"layer {layer} out of range 0..{self.layer_count - 1}")

    def highest_layer_active(self) -> int:
        return max(self._active)

    def layer_active(self, layer: int) -> bool:
        self._check(layer)
        return layer in self._active

    def activate(self, layer: int) -> bool:
        """Turn a layer on; return whether its state changed."""
        self._check(layer)
        if layer in self._active:
            return False
        self._active.add(layer)
        return True

    def deactivate(self, layer: int) -> bool:
        """Turn a layer off; the default layer stays on. Return whether state changed."""
        self._check(layer)
        if layer == self.default_layer or layer not in self._active:
            return False
        self._active.discard(layer)
        return True


class Scheduler:
    """Delayed work on a simulated millisecond clock.

    Scheduling a key that is already pending leaves the pending job untouched.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now = start_ms
        self._heap: list[tuple[int, int, Hashable]] = []
        self._jobs: dict[Hashable, tuple[int, int, Callable[[], object]]] = {}
        self._seq = itertools.count()

    def now(self) -> int:
        return self._now

    def schedule(self, key: Hashable, delay_ms: int, callback: Callable[[], object]) -> bool:
        """Queue callback to run after delay_ms; return False if key is already pending."""
        if delay_ms < 0:
            raise ValueError("delay must not be negative")
        if key in self._jobs:
            return False
        due = self._now + delay_ms
        seq = next(self._seq)
        self._jobs[key] = (due, seq, callback)
        heapq.heappush(self._heap, (due, seq, key))
        return True

    def cancel(self, key: Hashable) -> bool:
        return self._jobs.pop(key, None) is not None

    def pending(self, key: Hashable) -> bool:
        return key in self._jobs

    def advance(self, ms: int) -> None:
        """Move the clock forward, running every job that falls due on the way."""
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + ms
        while self._heap and self._heap[0][0] <= target:
            due, seq, key = heapq.heappop(self._heap)
            job = self._jobs.get(key)
            if job is None or job[1] != seq:
                continue
            del self._jobs[key]
            self._now = due
            job[2]()
        self._now = target


class Runtime:
    """Holds the keymap, the scheduler and the behaviors registered by name."""

    def __init__(self, keymap: Keymap | None = None, scheduler: Scheduler | None = None) -> None:
        self.keymap = keymap if keymap is not None else Keymap()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self._behaviors: dict[str, Behavior] = {}

    def register(self, name: str, behavior: Behavior) -> None:
        if name in self._behaviors:
            raise ValueError(f"behavior {name!r} is already registered")
        self._behaviors[name] = behavior

    def get_behavior(self, name: str) -> Behavior | None:
        return self._behaviors.get(name)