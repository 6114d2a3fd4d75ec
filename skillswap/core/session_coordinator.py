"""
Real-time session coordinator.

Process-local registry of live connections and of the sessions they
have joined, plus routing of chat, whiteboard, video signalling and
direct messages between them.

Every connection owns a bounded outbox drained by its own writer task.
Broadcasts only enqueue, so a slow or dead socket never delays delivery
to anyone else; when an outbox is full the message is dropped for that
connection.

Dependencies: pydantic, skillswap.core.security, skillswap.models.realtime
System role: WebSocket session/messaging broker (one instance per app)
"""

import asyncio
import json
import logging
import uuid
from contextlib import suppress
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Protocol

from pydantic import ValidationError

from skillswap.core.exceptions import (
    AuthenticationError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SkillSwapException,
)
from skillswap.core.security import decode_access_token
from skillswap.models.realtime import (
    AuthenticatePayload,
    ChatPayload,
    ClientEventType,
    DirectMessagePayload,
    Envelope,
    ErrorCode,
    ServerEvent,
    ServerEventType,
    SessionPayload,
    VideoSignalPayload,
    WhiteboardPayload,
)

logger = logging.getLogger(__name__)


class ConnectionHandle(Protocol):
    """Anything that can push a JSON frame to a client (e.g. a Starlette WebSocket)."""

    async def send_json(self, data: Any) -> None: ...


class RealtimeStorage(Protocol):
    """Storage calls the coordinator needs."""

    async def get_user_profile(self, user_id: int) -> dict | None: ...

    async def is_session_participant(self, session_id: int, user_id: int) -> bool: ...

    async def save_whiteboard(self, session_id: int, whiteboard_data: Any) -> None: ...

    async def create_direct_message(self, sender_id: int, receiver_id: int, content: str) -> dict: ...


class NotInSessionError(SkillSwapException):
    """Raised when a connection acts on a session it has not joined."""

    pass


@dataclass
class ConnectionInfo:
    """
    Registry entry for one live connection.

    Attributes:
        connection_id: Server-assigned id
        handle: Transport used by the writer task
        user_id: Verified user id, None until authenticated
        outbox: Pending outbound frames
        sessions: Session ids this connection has joined
        writer: Task draining the outbox
        connected_at: UTC time the connection was registered
        closed: Set once the transport failed or the connection left
        dropped: Frames discarded because the outbox was full
    """

    connection_id: str
    handle: ConnectionHandle
    outbox: asyncio.Queue
    user_id: int | None = None
    sessions: set[int] = field(default_factory=set)
    writer: asyncio.Task | None = None
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    closed: bool = False
    dropped: int = 0


class SessionCoordinator:
    """
    Connection and session-participant registry.

    All registry mutations happen under one asyncio.Lock. Storage calls
    are made outside the lock.
    """

    def __init__(
        self,
        store: RealtimeStorage,
        token_decoder: Callable[[str], int] = decode_access_token,
        outbox_size: int = 256,
        protocol_version: int = 1,
    ) -> None:
        """
        Args:
            store: Storage adapter for profiles, participation checks and persistence
            token_decoder: Verifies a bearer token and returns its user id
            outbox_size: Frames buffered per connection before dropping
            protocol_version: Envelope version spoken by the server
        """
        self.store = store
        self.token_decoder = token_decoder
        self.outbox_size = outbox_size
        self.protocol_version = protocol_version

        # connection_id -> ConnectionInfo
        self._connections: dict[str, ConnectionInfo] = {}
        # session_id -> set[connection_id]
        self._session_participants: dict[int, set[str]] = {}
        self._lock = asyncio.Lock()

        self._handlers: dict[ClientEventType, Callable[[ConnectionInfo, dict], Awaitable[None]]] = {
            ClientEventType.AUTHENTICATE: self._on_authenticate,
            ClientEventType.JOIN_SESSION: self._on_join_session,
            ClientEventType.LEAVE_SESSION: self._on_leave_session,
            ClientEventType.CHAT_MESSAGE: self._on_chat_message,
            ClientEventType.WHITEBOARD_UPDATE: self._on_whiteboard_update,
            ClientEventType.VIDEO_SIGNAL: self._on_video_signal,
            ClientEventType.DIRECT_MESSAGE: self._on_direct_message,
        }

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def participants(self, session_id: int) -> set[str]:
        """Connection ids currently in a session (copy)."""
        return set(self._session_participants.get(session_id, ()))

    def active_sessions(self) -> set[int]:
        return set(self._session_participants)

    def get_connection(self, connection_id: str) -> ConnectionInfo | None:
        return self._connections.get(connection_id)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    async def connect(self, handle: ConnectionHandle, user_id: int | None = None) -> str:
        """
        Register a new connection and greet it with its id.

        Args:
            handle: Accepted transport
            user_id: Identity already verified by the transport layer

        Returns:
            str: Fresh connection id
        """
        connection_id = uuid.uuid4().hex
        conn = ConnectionInfo(
            connection_id=connection_id,
            handle=handle,
            outbox=asyncio.Queue(maxsize=self.outbox_size),
            user_id=user_id,
        )
        conn.writer = asyncio.create_task(
            self._writer(conn), name=f"realtime-writer-{connection_id}"
        )

        async with self._lock:
            self._connections[connection_id] = conn
            self._send(
                conn,
                ServerEventType.CONNECTION,
                {"connectionId": connection_id, "userId": user_id},
            )

        logger.info(
            "Realtime connection opened",
            extra={
                "connection_id": connection_id,
                "user_id": user_id,
                "total_connections": len(self._connections),
            },
        )
        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        """
        Purge a connection from every registry.

        Sessions left empty are deleted; remaining participants of the
        other sessions receive user-left.
        """
        async with self._lock:
            conn = self._connections.pop(connection_id, None)
            if conn is None:
                return
            conn.closed = True
            for session_id in list(conn.sessions):
                self._remove_participant(conn, session_id)

        if conn.writer is not None:
            conn.writer.cancel()
            with suppress(asyncio.CancelledError):
                await conn.writer

        logger.info(
            "Realtime connection closed",
            extra={
                "connection_id": connection_id,
                "user_id": conn.user_id,
                "dropped_messages": conn.dropped,
                "connected_seconds": round((datetime.now(timezone.utc) - conn.connected_at).total_seconds(), 1),
                "total_connections": len(self._connections),
            },
        )

    async def close(self) -> None:
        """Disconnect everything (application shutdown)."""
        for connection_id in list(self._connections):
            await self.disconnect(connection_id)

    async def flush(self) -> None:
        """Wait until every open connection's outbox has been written out."""
        for conn in list(self._connections.values()):
            if not conn.closed:
                await conn.outbox.join()

    # ------------------------------------------------------------------
    # Inbound messages
    # ------------------------------------------------------------------

    async def handle_message(self, connection_id: str, raw: str | bytes) -> None:
        """
        Process one inbound frame.

        Problems are reported to the sender as an error event; nothing a
        client sends can close its connection or affect other clients.
        """
        conn = self._connections.get(connection_id)
        if conn is None:
            logger.warning("Message for unknown connection", extra={"connection_id": connection_id})
            return

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(
                "Failed to parse realtime frame",
                extra={"connection_id": connection_id, "error_msg": str(e)},
            )
            await self._send_error(conn, ErrorCode.INVALID_JSON, "Invalid JSON format")
            return

        try:
            envelope = Envelope.model_validate(data)
        except ValidationError as e:
            await self._send_error(conn, ErrorCode.INVALID_MESSAGE, _first_error(e))
            return

        if envelope.version is not None and envelope.version != self.protocol_version:
            await self._send_error(
                conn,
                ErrorCode.UNSUPPORTED_VERSION,
                f"Unsupported protocol version {envelope.version}",
            )
            return

        try:
            event_type = ClientEventType(envelope.type)
        except ValueError:
            await self._send_error(conn, ErrorCode.UNKNOWN_TYPE, f"Unknown message type: {envelope.type}")
            return

        try:
            await self._handlers[event_type](conn, envelope.payload)
        except ValidationError as e:
            await self._send_error(conn, ErrorCode.INVALID_MESSAGE, _first_error(e))
        except AuthenticationError as e:
            await self._send_error(conn, ErrorCode.UNAUTHENTICATED, e.message)
        except ForbiddenError as e:
            await self._send_error(conn, ErrorCode.FORBIDDEN, e.message)
        except NotFoundError as e:
            await self._send_error(conn, ErrorCode.NOT_FOUND, e.message)
        except NotInSessionError as e:
            await self._send_error(conn, ErrorCode.NOT_IN_SESSION, e.message)
        except InvalidInputError as e:
            await self._send_error(conn, ErrorCode.INVALID_MESSAGE, e.message)
        except Exception:
            logger.exception(
                "Realtime handler failed",
                extra={"connection_id": connection_id, "event_type": event_type.value},
            )
            await self._send_error(conn, ErrorCode.INTERNAL_ERROR, "Internal error")

    async def _on_authenticate(self, conn: ConnectionInfo, payload: dict) -> None:
        if "token" not in payload:
            raise AuthenticationError("A signed token is required to authenticate")
        token = AuthenticatePayload.model_validate(payload).token
        user_id = self.token_decoder(token)

        async with self._lock:
            if conn.user_id is not None and conn.user_id != user_id:
                raise ForbiddenError("Connection is already bound to another user", actor_id=user_id)
            conn.user_id = user_id
            self._send(conn, ServerEventType.AUTHENTICATED, {"userId": user_id})

        logger.info(
            "Realtime connection authenticated",
            extra={"connection_id": conn.connection_id, "user_id": user_id},
        )

    async def _on_join_session(self, conn: ConnectionInfo, payload: dict) -> None:
        data = SessionPayload.model_validate(payload)
        user_id = self._require_user(conn, data.user_id)

        if not await self.store.is_session_participant(data.session_id, user_id):
            raise ForbiddenError("Not a participant of this session", actor_id=user_id)
        profile = await self.store.get_user_profile(user_id)

        async with self._lock:
            if conn.closed:
                return
            participants = self._session_participants.setdefault(data.session_id, set())
            already_joined = conn.connection_id in participants
            participants.add(conn.connection_id)
            conn.sessions.add(data.session_id)
            if not already_joined:
                self._broadcast(
                    data.session_id,
                    ServerEventType.USER_JOINED,
                    {"userData": profile, "sessionId": data.session_id},
                    exclude=conn.connection_id,
                )
            size = len(participants)

        logger.info(
            "User joined session",
            extra={
                "connection_id": conn.connection_id,
                "user_id": user_id,
                "session_id": data.session_id,
                "participants": size,
            },
        )

    async def _on_leave_session(self, conn: ConnectionInfo, payload: dict) -> None:
        data = SessionPayload.model_validate(payload)
        self._check_claimed_user(conn, data.user_id)

        async with self._lock:
            if data.session_id not in conn.sessions:
                raise NotInSessionError(f"Not in session {data.session_id}")
            self._remove_participant(conn, data.session_id)

        logger.info(
            "User left session",
            extra={
                "connection_id": conn.connection_id,
                "user_id": conn.user_id,
                "session_id": data.session_id,
            },
        )

    async def _on_chat_message(self, conn: ConnectionInfo, payload: dict) -> None:
        data = ChatPayload.model_validate(payload)
        user_id = self._require_user(conn, data.user_id)
        self._require_joined(conn, data.session_id)
        profile = await self.store.get_user_profile(user_id)

        async with self._lock:
            self._broadcast(
                data.session_id,
                ServerEventType.CHAT_MESSAGE,
                {
                    "message": data.message,
                    "userData": profile,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "sessionId": data.session_id,
                },
            )

    async def _on_whiteboard_update(self, conn: ConnectionInfo, payload: dict) -> None:
        data = WhiteboardPayload.model_validate(payload)
        self._require_user(conn)
        self._require_joined(conn, data.session_id)
        await self.store.save_whiteboard(data.session_id, data.whiteboard_data)

        async with self._lock:
            self._broadcast(
                data.session_id,
                ServerEventType.WHITEBOARD_UPDATE,
                {"whiteboardData": data.whiteboard_data, "sessionId": data.session_id},
                exclude=conn.connection_id,
            )

    async def _on_video_signal(self, conn: ConnectionInfo, payload: dict) -> None:
        data = VideoSignalPayload.model_validate(payload)
        self._require_user(conn)
        self._require_joined(conn, data.session_id)
        event = {
            "fromConnectionId": conn.connection_id,
            "signal": data.signal,
            "sessionId": data.session_id,
        }

        async with self._lock:
            participants = self._session_participants.get(data.session_id, set())
            if data.target and data.target != conn.connection_id and data.target in participants:
                target = self._connections.get(data.target)
                if target is not None:
                    self._send(target, ServerEventType.VIDEO_SIGNAL, event)
            else:
                self._broadcast(
                    data.session_id,
                    ServerEventType.VIDEO_SIGNAL,
                    event,
                    exclude=conn.connection_id,
                )

    async def _on_direct_message(self, conn: ConnectionInfo, payload: dict) -> None:
        data = DirectMessagePayload.model_validate(payload)
        sender_id = self._require_user(conn)
        message = await self.store.create_direct_message(sender_id, data.receiver_id, data.content)

        sent_at = message["sent_at"]
        event = {
            "id": message["id"],
            "senderId": sender_id,
            "receiverId": data.receiver_id,
            "content": message["content"],
            "sentAt": sent_at.isoformat() if isinstance(sent_at, datetime) else sent_at,
        }

        async with self._lock:
            recipients = [
                c for c in self._connections.values()
                if c.user_id in (sender_id, data.receiver_id)
            ]
            for recipient in recipients:
                self._send(recipient, ServerEventType.DIRECT_MESSAGE, event)

        logger.info(
            "Direct message delivered",
            extra={
                "message_id": message["id"],
                "sender_id": sender_id,
                "receiver_id": data.receiver_id,
                "recipients": len(recipients),
            },
        )

    # ------------------------------------------------------------------
    # Helpers (callers hold the lock where noted)
    # ------------------------------------------------------------------

    def _check_claimed_user(self, conn: ConnectionInfo, claimed_user_id: int | None) -> None:
        if claimed_user_id is not None and claimed_user_id != conn.user_id:
            raise ForbiddenError("userId does not match the authenticated user", actor_id=conn.user_id)

    def _require_user(self, conn: ConnectionInfo, claimed_user_id: int | None = None) -> int:
        if conn.user_id is None:
            raise AuthenticationError("Authenticate before sending this message")
        self._check_claimed_user(conn, claimed_user_id)
        return conn.user_id

    def _require_joined(self, conn: ConnectionInfo, session_id: int) -> None:
        if session_id not in conn.sessions:
            raise NotInSessionError(f"Join session {session_id} first")

    def _remove_participant(self, conn: ConnectionInfo, session_id: int) -> None:
        """Drop conn from a session, deleting the entry when it empties. Lock held."""
        conn.sessions.discard(session_id)
        participants = self._session_participants.get(session_id)
        if participants is None:
            return
        participants.discard(conn.connection_id)
        if not participants:
            del self._session_participants[session_id]
            logger.debug("Session registry entry removed", extra={"session_id": session_id})
            return
        self._broadcast(
            session_id,
            ServerEventType.USER_LEFT,
            {"userId": conn.user_id, "connectionId": conn.connection_id, "sessionId": session_id},
        )

    def _broadcast(
        self,
        session_id: int,
        event_type: ServerEventType,
        payload: dict,
        exclude: str | None = None,
    ) -> None:
        """Enqueue an event for every participant of a session. Lock held."""
        for connection_id in self._session_participants.get(session_id, ()):
            if connection_id == exclude:
                continue
            conn = self._connections.get(connection_id)
            if conn is not None:
                self._send(conn, event_type, payload)

    def _send(self, conn: ConnectionInfo, event_type: ServerEventType, payload: dict) -> None:
        """Non-blocking enqueue onto a connection's outbox."""
        if conn.closed:
            return
        frame = ServerEvent(type=event_type, payload=payload, version=self.protocol_version).to_dict()
        try:
            conn.outbox.put_nowait(frame)
        except asyncio.QueueFull:
            conn.dropped += 1
            logger.warning(
                "Outbox full, dropping message",
                extra={
                    "connection_id": conn.connection_id,
                    "event_type": event_type.value,
                    "dropped_messages": conn.dropped,
                },
            )

    async def _send_error(self, conn: ConnectionInfo, code: ErrorCode, message: str) -> None:
        logger.warning(
            "Realtime message rejected",
            extra={"connection_id": conn.connection_id, "code": code.value, "error_msg": message},
        )
        async with self._lock:
            self._send(conn, ServerEventType.ERROR, {"code": code.value, "message": message})

    async def _writer(self, conn: ConnectionInfo) -> None:
        """Drain the outbox onto the transport until cancelled or the transport fails."""
        while True:
            frame = await conn.outbox.get()
            try:
                await conn.handle.send_json(frame)
            except Exception as e:
                conn.closed = True
                logger.warning(
                    "Realtime send failed, closing writer",
                    extra={"connection_id": conn.connection_id, "error": str(e)},
                )
                conn.outbox.task_done()
                self._discard_outbox(conn)
                return
            conn.outbox.task_done()

    @staticmethod
    def _discard_outbox(conn: ConnectionInfo) -> None:
        while not conn.outbox.empty():
            conn.outbox.get_nowait()
            conn.outbox.task_done()


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg')}" if location else first.get("msg", "Invalid message")
