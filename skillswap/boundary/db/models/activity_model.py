"""
Activity ORM model.

Append-only log entry; entries with points drive the user's point and
level accrual.

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: Activity feed and point ledger
"""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin


class ActivityType(str, enum.Enum):
    """
    Activity classification.

    EXCHANGE: Exchange requested or completed
    BADGE: Badge earned
    VERIFICATION: Skill verified
    QUIZ: Assessment taken
    """

    EXCHANGE = "exchange"
    BADGE = "badge"
    VERIFICATION = "verification"
    QUIZ = "quiz"


class ActivityModel(Base, IntIDMixin, TimestampMixin):
    """
    Activity ORM model.

    Attributes:
        id: Integer primary key
        user_id: User the entry belongs to
        type: ActivityType
        description: Human-readable summary
        points_earned: Points credited with this entry (0 for pure log lines)
    """

    __tablename__ = "activities"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    type: Mapped[ActivityType] = mapped_column(
        Enum(ActivityType, native_enum=False),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(512), nullable=False)
    points_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
