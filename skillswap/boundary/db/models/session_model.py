"""
Session ORM model.

One scheduled meeting under an exchange.

Dependencies: sqlalchemy, skillswap.boundary.db.base, skillswap.core.state_machine
System role: Session persistence for scheduling and live collaboration
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin
from skillswap.core.state_machine import SessionStatus


class SessionModel(Base, IntIDMixin, TimestampMixin):
    """
    Session ORM model.

    Moving status into COMPLETED is the only trigger that advances the
    parent exchange's sessions_completed counter.

    Attributes:
        id: Integer primary key
        exchange_id: Parent exchange
        scheduled_time: Planned start (optional)
        duration: Minutes (default 60)
        status: SCHEDULED/COMPLETED/CANCELLED
        notes: Free text
        whiteboard_data: Last whiteboard snapshot pushed during the live session
    """

    __tablename__ = "sessions"

    exchange_id: Mapped[int] = mapped_column(
        ForeignKey("exchanges.id"),
        nullable=False,
        index=True,
    )
    scheduled_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, native_enum=False),
        nullable=False,
        default=SessionStatus.SCHEDULED,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    whiteboard_data: Mapped[dict | list | None] = mapped_column(
        JSON,
        nullable=True,
        default=None,
        doc="Opaque whiteboard blob; last writer wins",
    )
