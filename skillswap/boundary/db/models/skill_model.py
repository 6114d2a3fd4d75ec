"""
Skill ORM model.

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: Teaching/learning skill records used by the match finder
"""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin


class SkillModel(Base, IntIDMixin, TimestampMixin):
    """
    Skill ORM model.

    A user lists the same skill name as separate teaching and learning
    records, never both in one row. is_teaching never changes after
    creation; the match finder relies on the two sets being disjoint.

    Attributes:
        id: Integer primary key
        user_id: Owning user
        name: Skill name (exact-match key for matching)
        is_teaching: True for "can teach", False for "wants to learn"
        proficiency_level: beginner / intermediate / advanced / expert
        is_verified: Set by the external assessment flow
    """

    __tablename__ = "skills"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    is_teaching: Mapped[bool] = mapped_column(Boolean, nullable=False)
    proficiency_level: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="beginner",
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
