import pytest

from pointerflow.core import BehaviorResult, Binding, BindingEvent, Keymap, Runtime
from pointerflow.tog_layer import TogLayerBehavior


@pytest.fixture
def runtime():
    return Runtime(keymap=Keymap(layer_count=8))


def _press(behavior, layer):
    return behavior.binding_pressed(Binding("tog", layer), BindingEvent(layer=0))


def test_press_is_transparent(runtime):
    tog = TogLayerBehavior(runtime, 100)
    assert _press(tog, 2) is BehaviorResult.TRANSPARENT


def test_layer_activates_on_next_tick(runtime):
    tog = TogLayerBehavior(runtime, 100)
    _press(tog, 2)
    assert not runtime.keymap.layer_active(2)
    runtime.scheduler.advance(0)
    assert runtime.keymap.layer_active(2)
    assert runtime.keymap.highest_layer_active() == 2


def test_layer_deactivates_after_ttl(runtime):
    tog = TogLayerBehavior(runtime, 100)
    _press(tog, 2)
    runtime.scheduler.advance(99)
    assert runtime.keymap.layer_active(2)
    runtime.scheduler.advance(1)
    assert not runtime.keymap.layer_active(2)


def test_repeated_press_does_not_extend_ttl(runtime):
    tog = TogLayerBehavior(runtime, 100)
    _press(tog, 2)
    runtime.scheduler.advance(50)
    _press(tog, 2)
    runtime.scheduler.advance(50)
    assert not runtime.keymap.layer_active(2)


def test_press_after_expiry_starts_new_window(runtime):
    tog = TogLayerBehavior(runtime, 100)
    _press(tog, 2)
    runtime.scheduler.advance(100)
    _press(tog, 2)
    runtime.scheduler.advance(0)
    assert runtime.keymap.layer_active(2)
    runtime.scheduler.advance(100)
    assert not runtime.keymap.layer_active(2)


def test_no_activation_scheduled_when_layer_already_active(runtime):
    tog = TogLayerBehavior(runtime, 100)
    runtime.keymap.activate(3)
    _press(tog, 3)
    runtime.keymap.deactivate(3)
    runtime.scheduler.advance(0)
    assert not runtime.keymap.layer_active(3)


def test_deactivation_of_inactive_layer_is_harmless(runtime):
    tog = TogLayerBehavior(runtime, 10)
    _press(tog, 4)
    runtime.scheduler.advance(0)
    runtime.keymap.deactivate(4)
    runtime.scheduler.advance(10)
    assert not runtime.keymap.layer_active(4)


def test_default_layer_stays_active(runtime):
    tog = TogLayerBehavior(runtime, 10)
    _press(tog, 0)
    runtime.scheduler.advance(10)
    assert runtime.keymap.layer_active(0)


def test_negative_ttl_rejected(runtime):
    with pytest.raises(ValueError):
        TogLayerBehavior(runtime, -1)