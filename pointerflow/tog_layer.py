"""Behavior that turns a layer on while input keeps arriving."""

from __future__ import annotations

import logging

from pointerflow.core import Behavior, BehaviorResult, Binding, BindingEvent, Runtime

_log = logging.getLogger(__name__)


class TogLayerBehavior(Behavior):
    """Activate the layer in param1 and switch it off time_to_live_ms later.

    The deactivation is not postponed by further presses while it is pending.
    """

    def __init__(self, runtime: Runtime, time_to_live_ms: int) -> None:
        if time_to_live_ms < 0:
            raise ValueError("time_to_live_ms must not be negative")
        self._keymap = runtime.keymap
        self._scheduler = runtime.scheduler
        self.time_to_live_ms = time_to_live_ms
        self.toggle_layer = 0

    def _activate(self) -> None:
        _log.debug("activate layer %d", self.toggle_layer)
        self._keymap.activate(self.toggle_layer)

    def _deactivate(self) -> None:
        if not self._keymap.layer_active(self.toggle_layer):
            return
        _log.debug("deactivate layer %d", self.toggle_layer)
        self._keymap.deactivate(self.toggle_layer)

    def binding_pressed(self, binding: Binding, event: BindingEvent) -> BehaviorResult:
        self.toggle_layer = binding.param1
        if not self._keymap.layer_active(self.toggle_layer):
            self._scheduler.schedule((self, "activate"), 0, self._activate)
        self._scheduler.schedule((self, "deactivate"), self.time_to_live_ms, self._deactivate)
        return BehaviorResult.TRANSPARENT