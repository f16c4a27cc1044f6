from __future__ import annotations
import enum, logging
from dataclasses import dataclass
from typing import List, Optional, Tuple
from ..hand.analyzer import Signals
from ..runtime.config import ControllerConfig
from ..runtime.events import (ActionIntent, ButtonDown, ButtonUp, ModifierDown,
                              ModifierUp, MoveBy, MoveTo, ScrollBy)

log = logging.getLogger(__name__)

class InteractionState(enum.Enum):
    IDLE = "idle"
    PRESS_ENGAGED = "press_engaged"
    RELEASED = "released"
    SCROLLING = "scrolling"

@dataclass(frozen=True)
class ControllerSnapshot:
    state: InteractionState
    button_down: bool
    scroll_baseline: Optional[float]
    last_pointer: Optional[Tuple[float,float]]

class GestureStateMachine:
    """
    Pinch class: press/release with a hysteresis band, drag while pressed.
    Scroll class: scroll by the change of the fingertip spread.

    Press is right button + ctrl, with the cursor re-anchored to the screen centre.
    """
    BUTTON = "right"
    MODIFIER = "ctrl"

    def __init__(self, screen: Tuple[int,int]=(1920,1080), config: Optional[ControllerConfig]=None):
        self.screen = screen
        self.cfg = config or ControllerConfig()
        self.reset()

    def reset(self):
        self.state = InteractionState.IDLE
        self.button_down = False
        self.scroll_baseline: Optional[float] = None
        self.last_pointer: Optional[Tuple[float,float]] = None

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(self.state, self.button_down, self.scroll_baseline, self.last_pointer)

    def release_all(self) -> List[ActionIntent]:
        """Intents that let go of a held press; used when the loop shuts down."""
        if not self.button_down:
            return []
        self.button_down = False
        self.state = InteractionState.RELEASED
        self.last_pointer = None
        return [ModifierUp(key=self.MODIFIER), ButtonUp(button=self.BUTTON)]

    @property
    def engaged(self) -> bool:
        return self.state is InteractionState.PRESS_ENGAGED

    def step(self, label: int, sig: Signals) -> List[ActionIntent]:
        """Advance one confident frame; returns the intents to apply, in order."""
        if self.state is InteractionState.RELEASED:
            self.state = InteractionState.IDLE

        if label == self.cfg.scroll_label:
            return self._scroll(sig)

        # any other class drops the scroll baseline so re-entry seeds afresh
        self.scroll_baseline = None
        if self.state is InteractionState.SCROLLING:
            self.state = InteractionState.IDLE

        if label == self.cfg.pinch_label:
            return self._pinch(sig)
        return []

    def _pinch(self, sig: Signals) -> List[ActionIntent]:
        out: List[ActionIntent] = []
        cfg = self.cfg
        if sig.pinch < cfg.press_threshold and not self.button_down:
            w, h = self.screen
            out += [ButtonDown(button=self.BUTTON), ModifierDown(key=self.MODIFIER),
                    MoveTo(x=w//2, y=h//2)]
            self.button_down = True
            self.state = InteractionState.PRESS_ENGAGED
            self.last_pointer = sig.fingertip
            log.debug("press at pinch=%.2f", sig.pinch)
        elif sig.pinch > cfg.release_threshold and self.button_down:
            out += [ModifierUp(key=self.MODIFIER), ButtonUp(button=self.BUTTON)]
            self.button_down = False
            self.state = InteractionState.RELEASED
            self.last_pointer = None
            log.debug("release at pinch=%.2f", sig.pinch)

        if self.engaged and sig.pinch < cfg.movement_threshold and self.last_pointer is not None:
            x, y = sig.fingertip
            lx, ly = self.last_pointer
            dx, dy = x - lx, y - ly
            moved_x, moved_y = abs(dx) > cfg.deadzone_px, abs(dy) > cfg.deadzone_px
            moved = (moved_x and moved_y) if cfg.deadzone_mode == "both" else (moved_x or moved_y)
            if moved:
                out.append(MoveBy(dx=int(round(dx)), dy=int(round(dy))))
                self.last_pointer = (x, y)
        return out

    def _scroll(self, sig: Signals) -> List[ActionIntent]:
        if not self.engaged:
            self.state = InteractionState.SCROLLING
        if self.scroll_baseline is None:
            self.scroll_baseline = sig.spread
            return []
        delta = sig.spread - self.scroll_baseline
        self.scroll_baseline = sig.spread
        cfg = self.cfg
        if cfg.scroll_min < abs(delta) < cfg.scroll_max:
            ticks = int(delta / cfg.scroll_divisor)
            if ticks:
                return [ScrollBy(ticks=ticks)]
        elif abs(delta) >= cfg.scroll_max:
            log.debug("ignoring spread jump of %.2f", delta)
        return []
