"""
Storage adapter for the real-time session coordinator.

The coordinator lives for the whole process while database sessions are
per unit of work, so each call opens and closes its own AsyncSession.

Dependencies: skillswap.boundary.db, skillswap.boundary.db.CRUD
System role: Storage collaborator for WebSocket traffic
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import async_sessionmaker

from skillswap.boundary.db.connection import get_async_session_factory
from skillswap.boundary.db.CRUD.direct_message_crud import direct_message_crud
from skillswap.boundary.db.CRUD.exchange_crud import exchange_crud
from skillswap.boundary.db.CRUD.session_crud import session_crud
from skillswap.boundary.db.CRUD.user_crud import user_crud
from skillswap.core.exceptions import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


class RealtimeStore:
    """Database access used by SessionCoordinator."""

    def __init__(self, session_factory: async_sessionmaker | None = None) -> None:
        """
        Args:
            session_factory: Session factory (defaults to the application's)
        """
        self._session_factory = session_factory or get_async_session_factory()

    async def get_user_profile(self, user_id: int) -> dict | None:
        """Public profile of a user, or None if unknown."""
        async with self._session_factory() as db:
            user = await user_crud.get_by_id(db, user_id)
            return user.public_profile() if user else None

    async def is_session_participant(self, session_id: int, user_id: int) -> bool:
        """
        Check the user takes part in the session's exchange.

        Raises:
            NotFoundError: Unknown session
        """
        async with self._session_factory() as db:
            session = await session_crud.get_by_id(db, session_id)
            if session is None:
                raise NotFoundError("session", session_id)
            exchange = await exchange_crud.get_by_id(db, session.exchange_id)
            return exchange is not None and exchange.has_participant(user_id)

    async def save_whiteboard(self, session_id: int, whiteboard_data: Any) -> None:
        """
        Persist the latest whiteboard snapshot (last writer wins).

        Raises:
            NotFoundError: Unknown session
        """
        async with self._session_factory() as db:
            if not await session_crud.update_whiteboard(db, session_id, whiteboard_data):
                raise NotFoundError("session", session_id)
            await db.commit()

    async def create_direct_message(self, sender_id: int, receiver_id: int, content: str) -> dict:
        """
        Store a direct message.

        Returns:
            dict: id, sender_id, receiver_id, content, sent_at

        Raises:
            InvalidInputError: Empty content
            NotFoundError: Unknown receiver
        """
        if not content or not content.strip():
            raise InvalidInputError("Message content is required", field="content")

        async with self._session_factory() as db:
            if not await user_crud.exists(db, receiver_id):
                raise NotFoundError("user", receiver_id)
            message = await direct_message_crud.create(
                db,
                sender_id=sender_id,
                receiver_id=receiver_id,
                content=content,
            )
            await db.commit()

        logger.info(
            "Direct message stored",
            extra={"message_id": message.id, "sender_id": sender_id, "receiver_id": receiver_id},
        )
        return {
            "id": message.id,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "content": content,
            "sent_at": message.created_at,
        }
