from gesturemouse.fuse.state import GestureStateMachine, InteractionState
from gesturemouse.hand.analyzer import Signals
from gesturemouse.runtime.config import ControllerConfig
from gesturemouse.runtime.events import (ButtonDown, ButtonUp, ModifierDown, ModifierUp,
                                         MoveBy, MoveTo, ScrollBy)

def pinch(d, tip=(100.0, 100.0)):
    return Signals(pinch=d, spread=0.0, fingertip=tip)

def spread(s):
    return Signals(pinch=50.0, spread=s, fingertip=(0.0, 0.0))

def kinds(intents):
    return [type(i) for i in intents]

def test_hysteresis_single_press_and_release():
    sm = GestureStateMachine(screen=(1920,1080))
    out = [sm.step(0, pinch(d)) for d in [20, 6, 6, 10, 13]]
    downs = [i for i, o in enumerate(out) if any(isinstance(x, ButtonDown) for x in o)]
    ups = [i for i, o in enumerate(out) if any(isinstance(x, ButtonUp) for x in o)]
    assert downs == [1]
    assert ups == [4]
    assert out[2] == [] and out[3] == []

def test_press_intents_and_latch():
    sm = GestureStateMachine(screen=(1920,1080))
    out = sm.step(0, pinch(6))
    assert out == [ButtonDown(button="right"), ModifierDown(key="ctrl"), MoveTo(x=960, y=540)]
    assert sm.state is InteractionState.PRESS_ENGAGED and sm.button_down
    assert sm.last_pointer == (100.0, 100.0)

def test_release_is_transient():
    sm = GestureStateMachine()
    sm.step(0, pinch(6))
    out = sm.step(0, pinch(13))
    assert out == [ModifierUp(key="ctrl"), ButtonUp(button="right")]
    assert sm.state is InteractionState.RELEASED and not sm.button_down
    sm.step(0, pinch(20))
    assert sm.state is InteractionState.IDLE

def test_drag_while_pressed():
    sm = GestureStateMachine()
    sm.step(0, pinch(6, (100.0, 100.0)))
    assert sm.step(0, pinch(10, (103.0, 102.0))) == []   # inside dead-zone
    assert sm.step(0, pinch(10, (120.0, 101.0))) == [MoveBy(dx=20, dy=1)]
    assert sm.last_pointer == (120.0, 101.0)

def test_deadzone_both_axes_mode():
    sm = GestureStateMachine(config=ControllerConfig(deadzone_mode="both"))
    sm.step(0, pinch(6, (100.0, 100.0)))
    assert sm.step(0, pinch(10, (130.0, 101.0))) == []
    assert sm.step(0, pinch(10, (130.0, 120.0))) == [MoveBy(dx=30, dy=20)]

def test_no_drag_while_released():
    sm = GestureStateMachine()
    for x in range(0, 400, 40):
        out = sm.step(0, pinch(10, (float(x), float(x))))
        assert not any(isinstance(i, MoveBy) for i in out)
        assert not sm.button_down

def test_no_drag_beyond_movement_threshold():
    sm = GestureStateMachine(config=ControllerConfig(release_threshold=20.0))
    sm.step(0, pinch(6, (0.0, 0.0)))
    assert sm.step(0, pinch(16, (50.0, 50.0))) == []
    assert sm.button_down

def test_scroll_seeding_dead_zone_and_noise_bound():
    sm = GestureStateMachine()
    assert sm.step(1, spread(20.0)) == []
    assert sm.state is InteractionState.SCROLLING
    assert sm.scroll_baseline == 20.0
    assert sm.step(1, spread(20.5)) == []
    assert sm.step(1, spread(30.5)) == [ScrollBy(ticks=2)]
    assert sm.step(1, spread(80.5)) == []
    assert sm.scroll_baseline == 80.5
    assert sm.step(1, spread(70.5)) == [ScrollBy(ticks=-2)]

def test_scroll_baseline_resets_when_class_changes():
    sm = GestureStateMachine()
    sm.step(1, spread(20.0))
    sm.step(0, pinch(50))
    assert sm.scroll_baseline is None
    assert sm.state is InteractionState.IDLE
    assert sm.step(1, spread(30.0)) == []      # re-seeded, no jump
    sm.step(7, pinch(50))
    assert sm.scroll_baseline is None

def test_unknown_label_is_noop():
    sm = GestureStateMachine()
    assert sm.step(3, pinch(1)) == []
    assert sm.state is InteractionState.IDLE and not sm.button_down

def test_reset_and_snapshot():
    sm = GestureStateMachine()
    sm.step(0, pinch(6))
    snap = sm.snapshot()
    assert snap.button_down and snap.state is InteractionState.PRESS_ENGAGED
    sm.reset()
    assert sm.snapshot().state is InteractionState.IDLE
    assert sm.snapshot().last_pointer is None

def test_release_all_lets_go_of_held_press():
    sm = GestureStateMachine()
    sm.step(0, pinch(6))
    assert sm.release_all() == [ModifierUp(key="ctrl"), ButtonUp(button="right")]
    assert not sm.button_down and sm.state is InteractionState.RELEASED
    assert sm.release_all() == []

def test_release_all_when_idle_is_empty():
    assert GestureStateMachine().release_all() == []
