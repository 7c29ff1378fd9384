# pointerflow

A small library that models how pointer input, such as a trackball or
trackpad, moves through a keyboard's keymap. Relative movement events go
through a chain of behaviors before they reach a mouse HID report.

- `InputListener` (`pointerflow.listener`) takes raw `InputEvent`s. An event
  only gets through if it has a `device` set and the highest active keymap
  layer is one of the listener's `layers`. The listener can remap, swap,
  invert and scale axes, and it runs the configured behavior bindings. It
  builds up movement, scroll and button state. When an event with `sync`
  set arrives, it rotates the movement by `rotate_deg` and sends a report to
  its `MouseHid`.
- `ScalerBehavior` (`pointerflow.scaler`) collects deltas for one event type
  and code, and scales them by `param1 / param2`. If the scaled value is
  zero, the motion is held back until it adds up to a non-zero step. A zero
  `param1` swallows the motion.
- `TogLayerBehavior` (`pointerflow.tog_layer`) turns on the layer given in
  `param1` when movement happens. It turns the layer off again
  `time_to_live_ms` later.
- `MoveToKeypressBehavior` (`pointerflow.move_to_keypress`) turns movement
  past a threshold into taps of the right, left, up or down binding. These
  are set in a `MoveToKeypressConfig`. Triggers are limited by
  `rate_limit_ms`.

The shared pieces are in `pointerflow.core`:

- the enums `EventType`, `RelCode` and `BehaviorResult`
- the event types `InputEvent`, `Binding` and `BindingEvent`
- the `Behavior` base class
- a `Keymap` that tracks layer state
- a deterministic `Scheduler` for delayed work
- a `Runtime` that holds the keymap, the scheduler and behaviors by name

## Installation

```
pip install pointerflow
```

## Example

```python
from pointerflow.core import Runtime, Binding, InputEvent, EventType, RelCode
from pointerflow.scaler import ScalerBehavior
from pointerflow.listener import InputListener, ListenerConfig

runtime = Runtime()
runtime.register("scaler_x", ScalerBehavior(EventType.REL, RelCode.X))

listener = InputListener(
    runtime,
    ListenerConfig(layers=[0], bindings=[Binding("scaler_x", 1, 2)]),
)

listener.handle(InputEvent(EventType.REL, RelCode.X, 10, sync=True, device="trackball"))
print(listener.hid.reports[-1])  # MouseReport(buttons=frozenset(), x=5, y=0, ...)
```

The `Scheduler` has no real timers. Call `runtime.scheduler.advance(ms)`
to run delayed work, such as layer deactivation or key releases. This makes
the behaviors easy to drive from tests or a simulation.

## What it does not do

The package does not read from input devices or send anything to a host.
`MouseHid` keeps the mouse state and adds each report it sends to its
`reports` list. Absolute (`EventType.ABS`) events are passed along but do
not change any state. The package has no command-line tool.

## Running the tests

```
pip install pointerflow[test]
pytest
```