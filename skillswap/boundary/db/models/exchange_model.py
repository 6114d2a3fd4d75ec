"""
Exchange ORM model.

Dependencies: sqlalchemy, skillswap.boundary.db.base, skillswap.core.state_machine
System role: Exchange persistence with lifecycle counters
"""

from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin
from skillswap.core.state_machine import ExchangeStatus


class ExchangeModel(Base, IntIDMixin, TimestampMixin):
    """
    Exchange ORM model relating a teacher and a student.

    Rows are never deleted; finished exchanges stay as history.

    Attributes:
        id: Integer primary key
        teacher_id: User teaching teacher_skill_id
        student_id: User on the learning side
        teacher_skill_id: Skill owned by the teacher
        student_skill_id: Skill owned by the student
        status: Lifecycle state (PENDING/ACTIVE/COMPLETED/CANCELLED)
        sessions_completed: Completed sessions so far (starts at 0)
        total_sessions: Sessions needed to complete, fixed at creation

    Constraints:
        sessions_completed <= total_sessions
    """

    __tablename__ = "exchanges"
    __table_args__ = (
        CheckConstraint(
            "sessions_completed <= total_sessions",
            name="ck_exchanges_sessions_completed_le_total",
        ),
    )

    teacher_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    teacher_skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"), nullable=False)
    student_skill_id: Mapped[int] = mapped_column(ForeignKey("skills.id"), nullable=False)

    status: Mapped[ExchangeStatus] = mapped_column(
        Enum(ExchangeStatus, native_enum=False),
        nullable=False,
        default=ExchangeStatus.PENDING,
    )

    sessions_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=3)

    def has_participant(self, user_id: int) -> bool:
        """True if user_id is the teacher or the student."""
        return user_id in (self.teacher_id, self.student_id)

    def counterpart_of(self, user_id: int) -> int:
        """The other participant's id."""
        return self.student_id if user_id == self.teacher_id else self.teacher_id
