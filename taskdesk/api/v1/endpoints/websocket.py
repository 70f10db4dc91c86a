"""Session events WebSocket: pushes session changes to the connected session.

Requires a valid session token via ?token=. Sign-in and user-update events
for the token's user are forwarded; sign-out and refresh events only when
they end the socket's own session, so other devices of the same user are
left alone. A refresh moves the socket onto the renewed session. The
subscription is made through a SessionStore owned by the connection and
released when the socket closes. The socket is closed after its session
signs out.
"""

import asyncio
import logging

from fastapi import APIRouter, WebSocket

from taskdesk.application.dtos.session import SessionChange
from taskdesk.application.services.session_store import SessionStore
from taskdesk.domain.enums import AuthEvent
from taskdesk.infrastructure.auth.token_backend import TokenAuthBackend
from taskdesk.schemas.websocket import SessionEventMessage
from taskdesk.shared.utils.datetime import utc_now

router = APIRouter()
logger = logging.getLogger(__name__)

SIGNED_OUT_CLOSE_CODE = 4001


async def _reject_websocket(websocket: WebSocket, reason: str, code: int = 1008) -> None:
    """Accept then immediately close with code/reason so client gets a proper close frame."""
    await websocket.accept()
    await websocket.close(code=code, reason=reason)


def _concerns(change: SessionChange, user_id: str, session_id: str) -> bool:
    if change.user_id != user_id:
        return False
    if change.event in (AuthEvent.SIGNED_OUT, AuthEvent.TOKEN_REFRESHED):
        return change.ended_session_id == session_id
    return True


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    """Consume client frames until the client goes away."""
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/events")
async def session_events(websocket: WebSocket):
    """Stream session changes for the token's user until sign-out or disconnect."""
    token = websocket.query_params.get("token")
    if not token:
        await _reject_websocket(websocket, "Missing token")
        return
    backend = TokenAuthBackend(
        bus=websocket.app.state.auth_bus,
        revocations=websocket.app.state.revocations,
    )
    with SessionStore(backend, token) as store:
        session = await store.get_current_session()
        if session is None:
            await _reject_websocket(websocket, "Invalid token")
            return
        queue: asyncio.Queue[SessionChange] = asyncio.Queue()
        current_session_id = session.session_id

        def on_change(change: SessionChange) -> None:
            nonlocal current_session_id
            if not _concerns(change, session.user_id, current_session_id):
                return
            if change.event is AuthEvent.TOKEN_REFRESHED and change.session is not None:
                current_session_id = change.session.session_id
            queue.put_nowait(change)

        store.on_session_change(on_change)
        await websocket.accept()
        receiver = asyncio.create_task(_wait_for_disconnect(websocket))
        try:
            while True:
                getter = asyncio.create_task(queue.get())
                done, _ = await asyncio.wait(
                    {getter, receiver}, return_when=asyncio.FIRST_COMPLETED
                )
                if getter not in done:
                    getter.cancel()
                    logger.debug("Session events socket closed by client")
                    return
                change = getter.result()
                message = SessionEventMessage(
                    event=change.event, user_id=change.user_id, timestamp=utc_now()
                )
                await websocket.send_json(message.model_dump(mode="json"))
                if change.event is AuthEvent.SIGNED_OUT:
                    await websocket.close(code=SIGNED_OUT_CLOSE_CODE, reason="Signed out")
                    return
        finally:
            receiver.cancel()
