from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, Literal, List, Union, Annotated
import asyncio, logging, websockets, time

log = logging.getLogger(__name__)

Button = Literal["left","right","middle"]

class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)

class MoveBy(_Intent):
    kind: Literal["move_by"] = "move_by"
    dx: int; dy: int

class MoveTo(_Intent):
    kind: Literal["move_to"] = "move_to"
    x: int; y: int

class ButtonDown(_Intent):
    kind: Literal["button_down"] = "button_down"
    button: Button = "right"

class ButtonUp(_Intent):
    kind: Literal["button_up"] = "button_up"
    button: Button = "right"

class ModifierDown(_Intent):
    kind: Literal["modifier_down"] = "modifier_down"
    key: str = "ctrl"

class ModifierUp(_Intent):
    kind: Literal["modifier_up"] = "modifier_up"
    key: str = "ctrl"

class ScrollBy(_Intent):
    kind: Literal["scroll_by"] = "scroll_by"
    ticks: int

ActionIntent = Annotated[
    Union[MoveBy, MoveTo, ButtonDown, ButtonUp, ModifierDown, ModifierUp, ScrollBy],
    Field(discriminator="kind"),
]

class Event(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    frame: int
    label: Optional[int]=None
    confidence: float=0.0
    intents: List[ActionIntent] = []

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
    async def pump():
        while True:
            msg = await queue.get()
            if clients:
                await asyncio.gather(*[c.send(msg) for c in list(clients)], return_exceptions=True)
    async with websockets.serve(handler, host, port):
        log.info("broadcasting intents on ws://%s:%d", host, port)
        await pump()
