"""
Exchange CRUD operations.

Provides participant lookups and the compare-and-set writes the
lifecycle manager relies on.

Dependencies: sqlalchemy, skillswap.boundary.db.models, skillswap.core.state_machine
System role: Exchange persistence operations
"""

from typing import Iterable, Sequence

from sqlalchemy import or_, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.exchange_model import ExchangeModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD
from skillswap.core.state_machine import ExchangeStatus, OPEN_EXCHANGE_STATUSES


class ExchangeCRUD(BaseCRUD[ExchangeModel]):
    """
    CRUD operations for ExchangeModel.

    Status and counter writes are conditional UPDATEs; callers inspect
    the boolean result to learn whether they won.
    """

    def __init__(self) -> None:
        """Initialize ExchangeCRUD with ExchangeModel."""
        super().__init__(ExchangeModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> Sequence[ExchangeModel]:
        """
        Retrieve exchanges where the user is teacher or student.

        Args:
            session: Async database session
            user_id: Participant id

        Returns:
            Sequence of ExchangeModels, newest first
        """
        stmt = (
            select(ExchangeModel)
            .where(or_(ExchangeModel.teacher_id == user_id, ExchangeModel.student_id == user_id))
            .order_by(ExchangeModel.id.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def transition_status(
        self,
        session: AsyncSession,
        id: int,
        expected: ExchangeStatus | Iterable[ExchangeStatus],
        new_status: ExchangeStatus,
    ) -> bool:
        """
        Move an exchange to new_status only if it is still in an expected status.

        Args:
            session: Async database session
            id: Exchange id
            expected: Status (or statuses) the caller observed
            new_status: Target status

        Returns:
            True if this call performed the transition
        """
        if isinstance(expected, ExchangeStatus):
            expected = (expected,)
        return await self.update_where(
            session,
            id,
            ExchangeModel.status.in_(list(expected)),
            status=new_status,
        )

    async def increment_sessions_completed(self, session: AsyncSession, id: int) -> bool:
        """
        Atomically count one more completed session.

        Only applies while the exchange is open and below its target,
        so sessions_completed never exceeds total_sessions.

        Args:
            session: Async database session
            id: Exchange id

        Returns:
            True if the counter advanced
        """
        return await self.update_where(
            session,
            id,
            ExchangeModel.sessions_completed < ExchangeModel.total_sessions,
            ExchangeModel.status.in_(list(OPEN_EXCHANGE_STATUSES)),
            sessions_completed=ExchangeModel.sessions_completed + 1,
        )

    async def count_completed_by_user(self, session: AsyncSession) -> dict[int, int]:
        """
        Count completed exchanges per participant.

        Returns:
            dict mapping user id to number of completed exchanges
        """
        counts: dict[int, int] = {}
        for column in (ExchangeModel.teacher_id, ExchangeModel.student_id):
            stmt = (
                select(column, func.count())
                .where(ExchangeModel.status == ExchangeStatus.COMPLETED)
                .group_by(column)
            )
            result = await session.execute(stmt)
            for user_id, count in result.all():
                counts[user_id] = counts.get(user_id, 0) + count
        return counts


exchange_crud = ExchangeCRUD()
