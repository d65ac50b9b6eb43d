"""WebSocket stream of fleet events."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ...config import settings
from ...services.events import QueueSubscriber

logger = logging.getLogger(__name__)

router = APIRouter(tags=["updates"])


async def stream_updates(websocket: WebSocket) -> None:
    broadcaster = websocket.app.state.broadcaster
    subscriber = QueueSubscriber()
    # Register before accepting so events published right after the handshake are not missed.
    broadcaster.subscribe(subscriber)
    receiver: asyncio.Future | None = None
    getter: asyncio.Future | None = None
    try:
        await websocket.accept()
        logger.info("WebSocket connection established")
        receiver = asyncio.ensure_future(websocket.receive_text())
        while True:
            getter = asyncio.ensure_future(subscriber.queue.get())
            done, _ = await asyncio.wait({receiver, getter}, return_when=asyncio.FIRST_COMPLETED)
            if receiver in done:
                # Client messages are ignored; this raises on disconnect.
                receiver.result()
                receiver = asyncio.ensure_future(websocket.receive_text())
            if getter in done:
                await websocket.send_json(getter.result())
            else:
                getter.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await getter
    except WebSocketDisconnect:
        logger.info("WebSocket connection closed")
    finally:
        broadcaster.unsubscribe(subscriber)
        for pending in (receiver, getter):
            if pending is not None and not pending.done():
                pending.cancel()
                with contextlib.suppress(asyncio.CancelledError, WebSocketDisconnect):
                    await pending


router.add_api_websocket_route(settings.websocket_path, stream_updates)
