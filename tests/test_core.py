import pytest

from pointerflow.core import (
    Behavior,
    BehaviorResult,
    Binding,
    BindingEvent,
    EventType,
    InputEvent,
    Keymap,
    RelCode,
    Runtime,
    Scheduler,
)


def test_base_behavior_is_transparent():
    behavior = Behavior()
    event = BindingEvent(layer=0, input_event=InputEvent(EventType.REL, RelCode.X, 3))
    assert behavior.binding_pressed(Binding("b"), event) is BehaviorResult.TRANSPARENT
    assert behavior.binding_released(Binding("b"), event) is BehaviorResult.TRANSPARENT


def test_keymap_default_layer_active():
    keymap = Keymap(layer_count=4)
    assert keymap.layer_active(0)
    assert keymap.highest_layer_active() == 0


def test_keymap_highest_layer_tracks_activation():
    keymap = Keymap(layer_count=8)
    assert keymap.activate(3)
    assert keymap.activate(1)
    assert keymap.highest_layer_active() == 3
    assert keymap.deactivate(3)
    assert keymap.highest_layer_active() == 1
    assert not keymap.layer_active(3)


def test_keymap_activate_twice_reports_no_change():
    keymap = Keymap(layer_count=4)
    assert keymap.activate(2) is True
    assert keymap.activate(2) is False


def test_keymap_default_layer_cannot_be_deactivated():
    keymap = Keymap(layer_count=4, default_layer=1)
    assert keymap.deactivate(1) is False
    assert keymap.layer_active(1)


@pytest.mark.parametrize("layer", [-1, 4])
def test_keymap_rejects_out_of_range(layer):
    keymap = Keymap(layer_count=4)
    with pytest.raises(ValueError):
        keymap.activate(layer)
    with pytest.raises(ValueError):
        keymap.layer_active(layer)


def test_scheduler_runs_due_jobs_in_order():
    scheduler = Scheduler()
    ran = []
    scheduler.schedule("b", 20, lambda: ran.append(("b", scheduler.now())))
    scheduler.schedule("a", 10, lambda: ran.append(("a", scheduler.now())))
    scheduler.advance(15)
    assert ran == [("a", 10)]
    assert scheduler.pending("b")
    scheduler.advance(5)
    assert ran == [("a", 10), ("b", 20)]
    assert scheduler.now() == 20


def test_scheduler_does_not_reschedule_pending_key():
    scheduler = Scheduler()
    ran = []
    assert scheduler.schedule("k", 10, lambda: ran.append("first"))
    assert not scheduler.schedule("k", 50, lambda: ran.append("second"))
    scheduler.advance(10)
    assert ran == ["first"]
    assert not scheduler.pending("k")


def test_scheduler_cancel():
    scheduler = Scheduler()
    ran = []
    scheduler.schedule("k", 5, lambda: ran.append(1))
    assert scheduler.cancel("k")
    assert not scheduler.cancel("k")
    scheduler.advance(10)
    assert ran == []


def test_scheduler_zero_delay_runs_on_advance_zero():
    scheduler = Scheduler()
    ran = []
    scheduler.schedule("k", 0, lambda: ran.append(scheduler.now()))
    scheduler.advance(0)
    assert ran == [0]


def test_scheduler_jobs_scheduled_from_callbacks_run_when_due():
    scheduler = Scheduler()
    ran = []

    def first():
        ran.append(("first", scheduler.now()))
        scheduler.schedule("second", 5, lambda: ran.append(("second", scheduler.now())))

    assert scheduler.schedule("first", 5, first) is True
    scheduler.advance(10)
    assert ran == [("first", 5), ("second", 10)]
    assert scheduler.now() == 10
    assert scheduler.pending("first") is False
    assert scheduler.pending("second") is False


def test_scheduler_rejects_negative_times():
    scheduler = Scheduler()
    with pytest.raises(ValueError):
        scheduler.schedule("k", -1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1)


def test_runtime_registry():
    runtime = Runtime()
    behavior = Behavior()
    runtime.register("scaler", behavior)
    assert runtime.get_behavior("scaler") is behavior
    assert runtime.get_behavior("missing") is None
    with pytest.raises(ValueError):
        runtime.register("scaler", Behavior())