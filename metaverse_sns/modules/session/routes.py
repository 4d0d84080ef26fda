"""
Live view over a WebSocket.

One connection stands in for one open page: it owns a session store fed by
the auth state stream and a debounced search controller, and pushes their
view events to the browser as JSON messages.
"""
import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool

from metaverse_sns.config import settings
from metaverse_sns.core.schemas import Toast
from metaverse_sns.core.session import resolve_session, user_payload
from metaverse_sns.modules.auth.service import AuthService
from metaverse_sns.modules.search.controller import SearchController
from metaverse_sns.modules.search.service import SearchService
from metaverse_sns.modules.session.store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


async def _pump(websocket: WebSocket, outbox: asyncio.Queue) -> None:
    while True:
        event = await outbox.get()
        if event is None:
            return
        await websocket.send_json(event)


@router.websocket("/live")
async def live_view(websocket: WebSocket):
    await websocket.accept()
    user_session = await run_in_threadpool(resolve_session, websocket.cookies)
    if user_session is None:
        await websocket.send_json({"type": "navigate", "path": settings.sign_in_path})
        await websocket.close()
        return

    loop = asyncio.get_running_loop()
    outbox: asyncio.Queue = asyncio.Queue()

    def publish(event: Optional[Dict[str, Any]]) -> None:
        loop.call_soon_threadsafe(outbox.put_nowait, event)

    controller = SearchController(SearchService(user_session.client), publish)
    sender = asyncio.create_task(_pump(websocket, outbox))
    try:
        with SessionStore(user_session.client.auth, publish, user=user_session.user) as store:
            publish({"type": "refresh", "user": user_payload(store.user)})
            while store.user is not None:
                message = await websocket.receive_json()
                # A sign-out may land while waiting for the next message
                if store.user is None:
                    break
                kind = message.get("type") if isinstance(message, dict) else None
                if kind == "search":
                    controller.submit(str(message.get("query", "")))
                elif kind == "sign_out":
                    try:
                        await run_in_threadpool(AuthService(user_session.client).sign_out)
                        publish(Toast(level="success", message="Signed out").model_dump())
                    except HTTPException as e:
                        publish(Toast(level="error", message=e.detail).model_dump())
                else:
                    publish(Toast(level="error", message=f"Unknown message type: {kind}").model_dump())

        # Signed out: the store already queued the navigation, flush and hang up
        logger.info(f"Live view signed out for {user_session.user_id}")
        await controller.close()
        publish(None)
        await sender
        await websocket.close()
    except WebSocketDisconnect:
        logger.info(f"Live view closed for {user_session.user_id}")
    finally:
        await controller.close()
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
