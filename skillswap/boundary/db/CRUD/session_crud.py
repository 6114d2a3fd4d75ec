"""
Session CRUD operations.

Dependencies: sqlalchemy, skillswap.boundary.db.models, skillswap.core.state_machine
System role: Session persistence operations
"""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.session_model import SessionModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD
from skillswap.core.state_machine import SessionStatus


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with per-exchange listing, conditional status
    writes and whiteboard snapshots.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_by_exchange(
        self,
        session: AsyncSession,
        exchange_id: int,
    ) -> Sequence[SessionModel]:
        """
        Retrieve all sessions of an exchange.

        Args:
            session: Async database session
            exchange_id: Parent exchange id

        Returns:
            Sequence of SessionModels ordered by id
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.exchange_id == exchange_id)
            .order_by(SessionModel.id)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_exchanges(
        self,
        session: AsyncSession,
        exchange_ids: Sequence[int],
    ) -> Sequence[SessionModel]:
        """
        Retrieve sessions of several exchanges in one query.

        Args:
            session: Async database session
            exchange_ids: Parent exchange ids

        Returns:
            Sequence of SessionModels
        """
        if not exchange_ids:
            return []
        stmt = select(SessionModel).where(SessionModel.exchange_id.in_(list(exchange_ids)))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def transition_status(
        self,
        session: AsyncSession,
        id: int,
        expected: SessionStatus,
        new_status: SessionStatus,
        **changes: Any,
    ) -> bool:
        """
        Move a session to new_status only if it is still in the expected status.

        Args:
            session: Async database session
            id: Session id
            expected: Status the caller observed
            new_status: Target status
            **changes: Other columns written in the same statement

        Returns:
            True if this call performed the transition
        """
        return await self.update_where(
            session,
            id,
            SessionModel.status == expected,
            status=new_status,
            **changes,
        )

    async def update_whiteboard(
        self,
        session: AsyncSession,
        id: int,
        whiteboard_data: Any,
    ) -> bool:
        """
        Replace the stored whiteboard snapshot.

        Args:
            session: Async database session
            id: Session id
            whiteboard_data: JSON-serializable blob

        Returns:
            True if the session exists
        """
        return await self.update_where(session, id, whiteboard_data=whiteboard_data)


session_crud = SessionCRUD()
