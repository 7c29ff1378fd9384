"""Behavior that scales accumulated relative motion by a binding's ratio."""

from __future__ import annotations

from enum import Enum

from pointerflow.core import Behavior, BehaviorResult, Binding, BindingEvent, EventType, RelCode

_SCALED_CODES = frozenset(
    {RelCode.X, RelCode.Y, RelCode.WHEEL, RelCode.HWHEEL, RelCode.MISC}
)


def _int16(value: int) -> int:
    return (value + 0x8000) % 0x10000 - 0x8000


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


class _Mode(Enum):
    NONE = 0
    REL = 1


class ScalerBehavior(Behavior):
    """Multiply motion on one event code by param1 / param2.

    Motion that scales to zero is held back and accumulated until it yields
    a non-zero step; a zero multiplier swallows the motion entirely.
    """

    def __init__(self, evt_type: int, input_code: int) -> None:
        self.evt_type = evt_type
        self.input_code = input_code
        self._mode = _Mode.NONE
        self._delta = 0

    def binding_pressed(self, binding: Binding, event: BindingEvent) -> BehaviorResult:
        evt = event.input_event
        if evt is None:
            raise ValueError("binding event carries no input event")
        if evt.type != self.evt_type or evt.code != self.input_code or not evt.value:
            return BehaviorResult.TRANSPARENT

        if evt.type == EventType.REL:
            if evt.code in _SCALED_CODES:
                self._mode = _Mode.REL
                self._delta = _int16(self._delta + evt.value)
        elif evt.type != EventType.ABS:
            return BehaviorResult.TRANSPARENT

        if self._mode is not _Mode.REL:
            return BehaviorResult.TRANSPARENT

        multiplier = _int16(binding.param1)
        if not multiplier:
            evt.value = 0
            return BehaviorResult.OPAQUE
        divisor = _int16(binding.param2)
        scaled = _int16(_trunc_div(self._delta * multiplier, divisor))
        if not scaled:
            return BehaviorResult.OPAQUE
        self._mode = _Mode.NONE
        self._delta = 0
        evt.value = scaled
        return BehaviorResult.TRANSPARENT