"""
Session scheduler.

Creates and updates the sessions of an exchange. Completing a session
advances the parent exchange in the same transaction.

Dependencies: skillswap.boundary.db.CRUD, skillswap.core.state_machine,
    skillswap.application.services.exchange_service
System role: Session use case orchestration
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.application.services.exchange_service import ExchangeService
from skillswap.boundary.db.CRUD.exchange_crud import exchange_crud
from skillswap.boundary.db.CRUD.session_crud import session_crud
from skillswap.boundary.db.CRUD.user_crud import user_crud
from skillswap.boundary.db.models.session_model import SessionModel
from skillswap.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    SkillSwapException,
)
from skillswap.core.state_machine import (
    SessionStatus,
    TERMINAL_EXCHANGE_STATUSES,
    validate_session_transition,
)

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MINUTES = 60


def session_to_dict(session: SessionModel) -> dict:
    return {
        "id": session.id,
        "exchange_id": session.exchange_id,
        "scheduled_time": session.scheduled_time,
        "duration": session.duration,
        "status": session.status,
        "notes": session.notes,
        "whiteboard_data": session.whiteboard_data,
        "created_at": session.created_at,
        "updated_at": session.updated_at,
    }


class SessionService:
    """Session scheduler orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize session service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.exchanges = ExchangeService(db)

    async def schedule_session(
        self,
        actor_id: int,
        exchange_id: int,
        scheduled_time: datetime | None = None,
        duration: int | None = None,
        notes: str | None = None,
    ) -> dict:
        """
        Schedule a session under an exchange.

        Args:
            actor_id: Acting user (teacher or student of the exchange)
            exchange_id: Parent exchange
            scheduled_time: Planned start
            duration: Minutes (default 60)
            notes: Optional agenda

        Returns:
            dict: Created session in SCHEDULED status

        Raises:
            NotFoundError: Unknown exchange
            ForbiddenError: Actor is not a participant
            ConflictError: Exchange already completed or cancelled
            InvalidInputError: Non-positive duration
        """
        exchange = await self.exchanges.get_participant_exchange(exchange_id, actor_id)
        if exchange.status in TERMINAL_EXCHANGE_STATUSES:
            raise ConflictError(
                "Cannot schedule a session on a closed exchange",
                current_state=exchange.status.value,
            )
        if duration is None:
            duration = DEFAULT_DURATION_MINUTES
        if duration <= 0:
            raise InvalidInputError("duration must be positive", field="duration")

        session = await session_crud.create(
            self.db,
            exchange_id=exchange_id,
            scheduled_time=scheduled_time,
            duration=duration,
            status=SessionStatus.SCHEDULED,
            notes=notes,
        )
        await self.db.commit()

        logger.info(
            "Session scheduled",
            extra={"session_id": session.id, "exchange_id": exchange_id, "actor_id": actor_id},
        )
        return session_to_dict(session)

    async def get_session(self, session_id: int, actor_id: int) -> dict:
        """Session by id, visible to participants of its exchange."""
        session = await session_crud.get_by_id(self.db, session_id)
        if session is None:
            raise NotFoundError("session", session_id)
        await self.exchanges.get_participant_exchange(session.exchange_id, actor_id)
        return session_to_dict(session)

    async def update_session(
        self,
        session_id: int,
        actor_id: int,
        status: SessionStatus | None = None,
        scheduled_time: datetime | None = None,
        duration: int | None = None,
        notes: str | None = None,
    ) -> dict:
        """
        Update a session, cascading completion onto its exchange.

        Moving into COMPLETED increments the exchange's completed-session
        counter and, on the last session, completes the exchange. Both
        writes commit together or not at all.

        Args:
            session_id: Session id
            actor_id: Acting user (participant of the parent exchange)
            status: Requested status
            scheduled_time: New start
            duration: New duration in minutes
            notes: New notes

        Returns:
            dict: Session after the update

        Raises:
            NotFoundError: Unknown session
            ForbiddenError: Actor is not a participant
            ConflictError: Transition not allowed, lost a concurrent update,
                or completing a session of a closed exchange
            InvalidInputError: Non-positive duration
        """
        changes = {}
        if scheduled_time is not None:
            changes["scheduled_time"] = scheduled_time
        if duration is not None:
            if duration <= 0:
                raise InvalidInputError("duration must be positive", field="duration")
            changes["duration"] = duration
        if notes is not None:
            changes["notes"] = notes

        try:
            session = await session_crud.get_by_id(self.db, session_id)
            if session is None:
                raise NotFoundError("session", session_id)
            exchange = await self.exchanges.get_participant_exchange(session.exchange_id, actor_id)

            prior = session.status
            status_changed = status is not None and validate_session_transition(prior, status)

            if status_changed:
                if status == SessionStatus.COMPLETED and exchange.status in TERMINAL_EXCHANGE_STATUSES:
                    raise ConflictError(
                        "Cannot complete a session of a closed exchange",
                        current_state=exchange.status.value,
                        requested_state=status.value,
                    )

                won = await session_crud.transition_status(self.db, session_id, prior, status, **changes)
                if not won:
                    raise ConflictError(
                        "Session status changed concurrently",
                        current_state=prior.value,
                        requested_state=status.value,
                    )

                if status == SessionStatus.COMPLETED:
                    await self.exchanges.record_session_completion(exchange.id)
            elif changes:
                await session_crud.update_where(self.db, session_id, **changes)

            await self.db.commit()
        except SkillSwapException as e:
            await self.db.rollback()
            logger.warning(
                "Session update rejected",
                extra={"session_id": session_id, "actor_id": actor_id, "error": e.message},
            )
            raise
        except Exception:
            await self.db.rollback()
            raise

        if status_changed:
            logger.info(
                "Session status changed",
                extra={
                    "session_id": session_id,
                    "exchange_id": exchange.id,
                    "from_status": prior.value,
                    "to_status": status.value,
                    "actor_id": actor_id,
                },
            )

        updated = await session_crud.get_by_id(self.db, session_id)
        return session_to_dict(updated)

    async def list_for_user(self, user_id: int) -> list[dict]:
        """
        Sessions across all of the user's exchanges.

        Returns:
            list[dict]: Session dicts with exchange {id, status}, other_user
                and is_teacher attached; ordered by scheduled_time with
                unscheduled sessions last
        """
        exchanges = {e.id: e for e in await exchange_crud.get_by_user(self.db, user_id)}
        sessions = await session_crud.get_by_exchanges(self.db, list(exchanges))
        others = await user_crud.get_many(
            self.db, [e.counterpart_of(user_id) for e in exchanges.values()]
        )

        sessions = sorted(
            sessions,
            key=lambda s: (s.scheduled_time is None, s.scheduled_time or 0, s.id),
        )

        result = []
        for session in sessions:
            exchange = exchanges[session.exchange_id]
            other = others.get(exchange.counterpart_of(user_id))
            result.append(
                {
                    **session_to_dict(session),
                    "exchange": {"id": exchange.id, "status": exchange.status},
                    "other_user": other.public_profile() if other else None,
                    "is_teacher": exchange.teacher_id == user_id,
                }
            )
        return result
