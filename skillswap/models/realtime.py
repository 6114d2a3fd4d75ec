"""
Real-time event schemas.

Defines the envelope and event types spoken on the WebSocket endpoint.
Every frame is {"type": ..., "payload": {...}, "version": 1}.

Dependencies: pydantic
System role: Real-time protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ServerEventType(str, Enum):
    """Server-to-client event types."""

    CONNECTION = "connection"
    AUTHENTICATED = "authenticated"
    USER_JOINED = "user-joined"
    USER_LEFT = "user-left"
    CHAT_MESSAGE = "chat-message"
    WHITEBOARD_UPDATE = "whiteboard-update"
    VIDEO_SIGNAL = "video-signal"
    DIRECT_MESSAGE = "direct-message"
    ERROR = "error"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    AUTHENTICATE = "authenticate"
    JOIN_SESSION = "join-session"
    LEAVE_SESSION = "leave-session"
    CHAT_MESSAGE = "chat-message"
    WHITEBOARD_UPDATE = "whiteboard-update"
    VIDEO_SIGNAL = "video-signal"
    DIRECT_MESSAGE = "direct-message"


class ErrorCode(str, Enum):
    """Codes carried by error events."""

    INVALID_JSON = "INVALID_JSON"
    INVALID_MESSAGE = "INVALID_MESSAGE"
    UNKNOWN_TYPE = "UNKNOWN_TYPE"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    NOT_IN_SESSION = "NOT_IN_SESSION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class Envelope(BaseModel):
    """
    Inbound frame.

    Attributes:
        type: Client event type (validated separately so unknown types get UNKNOWN_TYPE)
        payload: Event-specific payload
        version: Protocol version; omitted means current
    """

    type: str
    payload: dict[str, Any] = Field(default_factory=dict)
    version: int | None = None


class ServerEvent(BaseModel):
    """
    Outbound frame.

    Attributes:
        type: Server event type
        payload: Event-specific payload
        version: Protocol version
    """

    type: ServerEventType
    payload: dict[str, Any]
    version: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"type": self.type.value, "payload": self.payload, "version": self.version}


class AuthenticatePayload(BaseModel):
    token: str = Field(min_length=1)


class SessionPayload(BaseModel):
    """Payload of join-session / leave-session."""

    session_id: int = Field(alias="sessionId")
    user_id: int | None = Field(default=None, alias="userId")


class ChatPayload(SessionPayload):
    message: str = Field(min_length=1)


class WhiteboardPayload(BaseModel):
    session_id: int = Field(alias="sessionId")
    whiteboard_data: Any = Field(alias="whiteboardData")


class VideoSignalPayload(BaseModel):
    session_id: int = Field(alias="sessionId")
    target: str | None = None
    signal: Any


class DirectMessagePayload(BaseModel):
    receiver_id: int = Field(alias="receiverId")
    content: str = Field(min_length=1)
