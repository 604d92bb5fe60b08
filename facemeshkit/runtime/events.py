from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, Any
import asyncio, websockets, time
from ..face.analysis import FaceSummary
from ..log import get_logger

log = get_logger(__name__)

class Event(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    type: Literal["face_acquired", "face_lost", "detector_fault"]
    face: Optional[FaceSummary] = None
    extra: Dict[str, Any] = {}

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765):
    """Fan every queued JSON line out to all connected clients."""
    clients = set()

    async def handler(websocket):
        clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)

    async with websockets.serve(handler, host, port):
        log.info("broadcasting overlays on ws://%s:%d", host, port)
        while True:
            msg = await queue.get()
            results = await asyncio.gather(*[c.send(msg) for c in list(clients)], return_exceptions=True)
            for r in results:
                if isinstance(r, Exception):
                    log.debug("dropped client: %s", r)
