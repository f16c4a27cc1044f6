from __future__ import annotations
import logging
from typing import List, Tuple, Any
from ..errors import ActuatorError, InitializationError

log = logging.getLogger(__name__)

class PyAutoGuiActuator:
    """Injects pointer, key and scroll events through pyautogui."""
    def __init__(self, failsafe: bool=True):
        try:
            import pyautogui
        except Exception as e:  # no display / missing backend raises on import
            raise InitializationError(f"pyautogui unavailable: {e}") from e
        self._gui = pyautogui
        pyautogui.PAUSE = 0.0
        pyautogui.FAILSAFE = failsafe

    def _call(self, name: str, *args, **kw):
        try:
            return getattr(self._gui, name)(*args, **kw)
        except Exception as e:
            raise ActuatorError(name, e) from e

    def move_by(self, dx:int, dy:int): self._call("moveRel", dx, dy, duration=0.0)
    def move_to(self, x:int, y:int): self._call("moveTo", x, y, duration=0.0)
    def button_down(self, button:str): self._call("mouseDown", button=button)
    def button_up(self, button:str): self._call("mouseUp", button=button)
    def key_down(self, key:str): self._call("keyDown", key)
    def key_up(self, key:str): self._call("keyUp", key)
    def scroll(self, ticks:int): self._call("scroll", ticks)

    def screen_size(self) -> Tuple[int,int]:
        w, h = self._call("size")
        return int(w), int(h)

    def position(self) -> Tuple[int,int]:
        x, y = self._call("position")
        return int(x), int(y)

class RecordingActuator:
    """Records calls instead of touching the OS (dry runs, replays)."""
    def __init__(self, screen: Tuple[int,int]=(1920,1080)):
        self.screen = screen
        self.calls: List[Tuple[str, Tuple[Any,...]]] = []
        self._pos = (screen[0]//2, screen[1]//2)

    def _rec(self, name, *args):
        self.calls.append((name, args))
        log.debug("%s%s", name, args)

    def move_by(self, dx, dy):
        self._rec("move_by", dx, dy)
        self._pos = (self._pos[0]+dx, self._pos[1]+dy)
    def move_to(self, x, y):
        self._rec("move_to", x, y)
        self._pos = (x, y)
    def button_down(self, button): self._rec("button_down", button)
    def button_up(self, button): self._rec("button_up", button)
    def key_down(self, key): self._rec("key_down", key)
    def key_up(self, key): self._rec("key_up", key)
    def scroll(self, ticks): self._rec("scroll", ticks)
    def screen_size(self): return self.screen
    def position(self): return self._pos
