"""
Real-time WebSocket endpoint.

Routes: WS /ws

A bearer token may be given on connect (``?token=`` or an
``Authorization: Bearer`` header) to bind the connection's identity up
front; otherwise the client sends ``authenticate{token}`` later.

Client sends:
    {"type": "authenticate", "payload": {"token": "..."}}
    {"type": "join-session", "payload": {"sessionId": 1}}
    {"type": "leave-session", "payload": {"sessionId": 1}}
    {"type": "chat-message", "payload": {"sessionId": 1, "message": "..."}}
    {"type": "whiteboard-update", "payload": {"sessionId": 1, "whiteboardData": {...}}}
    {"type": "video-signal", "payload": {"sessionId": 1, "target": "...", "signal": {...}}}
    {"type": "direct-message", "payload": {"receiverId": 2, "content": "..."}}

Server sends (all with "version": 1):
    connection, authenticated, user-joined, user-left, chat-message,
    whiteboard-update, video-signal, direct-message, error

Dependencies: fastapi, skillswap.core.session_coordinator, skillswap.core.security
System role: WebSocket transport for the session coordinator
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from skillswap.core.exceptions import AuthenticationError
from skillswap.core.session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)
router = APIRouter(tags=["realtime"])


def extract_token(websocket: WebSocket) -> str | None:
    """Bearer token from the query string or the Authorization header."""
    token = websocket.query_params.get("token")
    if token:
        return token

    auth = websocket.headers.get("authorization")
    if auth:
        parts = auth.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return None


@router.websocket("/ws")
async def realtime_endpoint(websocket: WebSocket) -> None:
    """
    Relay session collaboration traffic through the app's SessionCoordinator.

    Args:
        websocket: WebSocket connection
    """
    coordinator: SessionCoordinator = websocket.app.state.coordinator

    user_id = None
    token = extract_token(websocket)
    if token is not None:
        try:
            user_id = coordinator.token_decoder(token)
        except AuthenticationError as e:
            logger.warning(
                "WebSocket rejected: invalid token",
                extra={"client_host": websocket.client.host if websocket.client else None, "error": e.message},
            )
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=e.message)
            return

    await websocket.accept()
    connection_id = await coordinator.connect(websocket, user_id=user_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE), message.get("reason"))
            # text and binary frames both carry a JSON envelope
            text = message.get("text")
            raw_data = text if text is not None else message.get("bytes", b"")
            await coordinator.handle_message(connection_id, raw_data)
    except WebSocketDisconnect as e:
        logger.info(
            "WebSocket client disconnected",
            extra={"connection_id": connection_id, "code": e.code},
        )
    finally:
        await coordinator.disconnect(connection_id)
