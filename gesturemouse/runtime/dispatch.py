from __future__ import annotations
import logging
from typing import Iterable, Protocol, Tuple
from ..errors import ActuatorError
from .events import (ActionIntent, ButtonDown, ButtonUp, ModifierDown, ModifierUp,
                     MoveBy, MoveTo, ScrollBy)

log = logging.getLogger(__name__)

class Actuator(Protocol):
    def move_by(self, dx:int, dy:int): ...
    def move_to(self, x:int, y:int): ...
    def button_down(self, button:str): ...
    def button_up(self, button:str): ...
    def key_down(self, key:str): ...
    def key_up(self, key:str): ...
    def scroll(self, ticks:int): ...
    def screen_size(self) -> Tuple[int,int]: ...
    def position(self) -> Tuple[int,int]: ...

class Dispatcher:
    """
    Applies a frame's intents in emitted order. Stateless: the single
    outstanding press is guaranteed by the state machine's latch.

    An ActuatorError is logged and the remaining intents still run.
    """
    def __init__(self, actuator: Actuator):
        self.actuator = actuator

    def apply(self, intents: Iterable[ActionIntent]) -> int:
        applied = 0
        for it in intents:
            try:
                self._apply_one(it)
                applied += 1
            except ActuatorError as e:
                log.warning("skipped %s: %s", it.kind, e)
        return applied

    def _apply_one(self, it: ActionIntent):
        a = self.actuator
        if isinstance(it, MoveBy): a.move_by(it.dx, it.dy)
        elif isinstance(it, MoveTo): a.move_to(it.x, it.y)
        elif isinstance(it, ButtonDown): a.button_down(it.button)
        elif isinstance(it, ButtonUp): a.button_up(it.button)
        elif isinstance(it, ModifierDown): a.key_down(it.key)
        elif isinstance(it, ModifierUp): a.key_up(it.key)
        elif isinstance(it, ScrollBy): a.scroll(it.ticks)
        else:
            raise TypeError(f"unknown intent {it!r}")
