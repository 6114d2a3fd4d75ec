"""
Direct message ORM model.

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: Persistence for real-time one-to-one messages
"""

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin


class DirectMessageModel(Base, IntIDMixin, TimestampMixin):
    """
    Direct message between two users; created_at doubles as the sent time.

    Attributes:
        id: Integer primary key
        sender_id: Author
        receiver_id: Recipient
        content: Message body
    """

    __tablename__ = "direct_messages"

    sender_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    receiver_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
