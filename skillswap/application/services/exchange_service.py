"""
Exchange lifecycle manager.

Owns the exchange state machine, the completed-session counter and the
point awards fired when an exchange completes.

Status and counter writes are compare-and-set at the database, so two
requests that observed the same prior state cannot both apply their
side effects.

Dependencies: skillswap.boundary.db.CRUD, skillswap.core.state_machine,
    skillswap.application.services.activity_service
System role: Exchange use case orchestration
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.application.services.activity_service import ActivityService
from skillswap.application.services.skill_service import skill_to_dict
from skillswap.boundary.db.CRUD.exchange_crud import exchange_crud
from skillswap.boundary.db.CRUD.skill_crud import skill_crud
from skillswap.boundary.db.CRUD.user_crud import user_crud
from skillswap.boundary.db.models.activity_model import ActivityType
from skillswap.boundary.db.models.exchange_model import ExchangeModel
from skillswap.configs import get_settings
from skillswap.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SkillSwapException,
)
from skillswap.core.state_machine import (
    ExchangeStatus,
    OPEN_EXCHANGE_STATUSES,
    validate_exchange_transition,
)

logger = logging.getLogger(__name__)

REQUEST_DESCRIPTION = "Created a new skill exchange request"
COMPLETED_DESCRIPTION = "Completed a skill exchange as a {role}"
ALL_SESSIONS_DESCRIPTION = "Completed all sessions in a skill exchange as a {role}"


def exchange_to_dict(exchange: ExchangeModel) -> dict:
    return {
        "id": exchange.id,
        "teacher_id": exchange.teacher_id,
        "student_id": exchange.student_id,
        "teacher_skill_id": exchange.teacher_skill_id,
        "student_skill_id": exchange.student_skill_id,
        "status": exchange.status,
        "sessions_completed": exchange.sessions_completed,
        "total_sessions": exchange.total_sessions,
        "created_at": exchange.created_at,
        "updated_at": exchange.updated_at,
    }


class ExchangeService:
    """Exchange lifecycle orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize exchange service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.activities = ActivityService(db)

    async def get_participant_exchange(self, exchange_id: int, user_id: int) -> ExchangeModel:
        """
        Load an exchange the user takes part in.

        Raises:
            NotFoundError: Unknown exchange
            ForbiddenError: User is neither teacher nor student
        """
        exchange = await exchange_crud.get_by_id(self.db, exchange_id)
        if exchange is None:
            raise NotFoundError("exchange", exchange_id)
        if not exchange.has_participant(user_id):
            raise ForbiddenError("Not a participant of this exchange", actor_id=user_id)
        return exchange

    async def create_exchange(
        self,
        actor_id: int,
        teacher_id: int,
        student_id: int,
        teacher_skill_id: int,
        student_skill_id: int,
        total_sessions: int | None = None,
    ) -> dict:
        """
        Open a pending exchange between a teacher and a student.

        Args:
            actor_id: Requesting user (must be teacher or student)
            teacher_id: User teaching teacher_skill_id
            student_id: User owning student_skill_id
            teacher_skill_id: Teacher's skill
            student_skill_id: Student's skill
            total_sessions: Sessions needed to complete (defaults to EXCHANGE_DEFAULT_TOTAL_SESSIONS)

        Returns:
            dict: Created exchange in PENDING status

        Raises:
            ForbiddenError: Actor is neither party
            InvalidInputError: Same user on both sides, skill ownership mismatch,
                or total_sessions < 1
            NotFoundError: Unknown user or skill
        """
        if actor_id not in (teacher_id, student_id):
            raise ForbiddenError("Requester must be the teacher or the student", actor_id=actor_id)
        if teacher_id == student_id:
            raise InvalidInputError("Teacher and student must be different users", field="studentId")

        if total_sessions is None:
            total_sessions = get_settings().exchange.default_total_sessions
        if total_sessions < 1:
            raise InvalidInputError("totalSessions must be at least 1", field="totalSessions")

        for user_id in (teacher_id, student_id):
            if not await user_crud.exists(self.db, user_id):
                raise NotFoundError("user", user_id)

        teacher_skill = await skill_crud.get_by_id(self.db, teacher_skill_id)
        if teacher_skill is None:
            raise NotFoundError("skill", teacher_skill_id)
        student_skill = await skill_crud.get_by_id(self.db, student_skill_id)
        if student_skill is None:
            raise NotFoundError("skill", student_skill_id)

        if teacher_skill.user_id != teacher_id:
            raise InvalidInputError("teacherSkillId does not belong to the teacher", field="teacherSkillId")
        if student_skill.user_id != student_id:
            raise InvalidInputError("studentSkillId does not belong to the student", field="studentSkillId")

        try:
            exchange = await exchange_crud.create(
                self.db,
                teacher_id=teacher_id,
                student_id=student_id,
                teacher_skill_id=teacher_skill_id,
                student_skill_id=student_skill_id,
                status=ExchangeStatus.PENDING,
                sessions_completed=0,
                total_sessions=total_sessions,
            )
            await self.activities.log_activity(actor_id, ActivityType.EXCHANGE, REQUEST_DESCRIPTION)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Exchange created",
            extra={
                "exchange_id": exchange.id,
                "teacher_id": teacher_id,
                "student_id": student_id,
                "total_sessions": total_sessions,
            },
        )
        return exchange_to_dict(exchange)

    async def get_exchange(self, exchange_id: int, user_id: int) -> dict:
        """Exchange by id, visible to its participants only."""
        exchange = await self.get_participant_exchange(exchange_id, user_id)
        return exchange_to_dict(exchange)

    async def update_status(
        self,
        exchange_id: int,
        new_status: ExchangeStatus,
        actor_id: int,
    ) -> dict:
        """
        Move an exchange through its state machine.

        Requesting the current status returns the exchange unchanged.
        Moving into COMPLETED awards completion points to both parties;
        the conditional write guarantees the award fires once.

        Args:
            exchange_id: Exchange id
            new_status: Requested status
            actor_id: Acting user (teacher or student)

        Returns:
            dict: Exchange after the update

        Raises:
            NotFoundError: Unknown exchange
            ForbiddenError: Actor is not a participant
            ConflictError: Transition not allowed, or the status changed concurrently
        """
        try:
            exchange = await self.get_participant_exchange(exchange_id, actor_id)
            prior = exchange.status
            if not validate_exchange_transition(prior, new_status):
                return exchange_to_dict(exchange)

            won = await exchange_crud.transition_status(self.db, exchange_id, prior, new_status)
            if not won:
                raise ConflictError(
                    "Exchange status changed concurrently",
                    current_state=prior.value,
                    requested_state=new_status.value,
                )

            if new_status == ExchangeStatus.COMPLETED:
                await self._award_completion(exchange, COMPLETED_DESCRIPTION)

            await self.db.commit()
        except SkillSwapException as e:
            await self.db.rollback()
            logger.warning(
                "Exchange status update rejected",
                extra={
                    "exchange_id": exchange_id,
                    "requested_status": new_status.value,
                    "actor_id": actor_id,
                    "error": e.message,
                },
            )
            raise
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Exchange status changed",
            extra={
                "exchange_id": exchange_id,
                "from_status": prior.value,
                "to_status": new_status.value,
                "actor_id": actor_id,
            },
        )
        updated = await exchange_crud.get_by_id(self.db, exchange_id)
        return exchange_to_dict(updated)

    async def record_session_completion(self, exchange_id: int) -> ExchangeModel:
        """
        Count one completed session and finalize the exchange on the last one.

        Runs inside the caller's transaction; the caller commits.

        Args:
            exchange_id: Parent exchange of the completed session

        Returns:
            ExchangeModel: Exchange state after the increment

        Raises:
            NotFoundError: Unknown exchange
            ConflictError: Exchange is terminal or already has all sessions counted
        """
        advanced = await exchange_crud.increment_sessions_completed(self.db, exchange_id)
        exchange = await exchange_crud.get_by_id(self.db, exchange_id)
        if exchange is None:
            raise NotFoundError("exchange", exchange_id)
        if not advanced:
            raise ConflictError(
                "Exchange cannot record another completed session",
                current_state=exchange.status.value,
            )

        logger.info(
            "Exchange session completed",
            extra={
                "exchange_id": exchange_id,
                "sessions_completed": exchange.sessions_completed,
                "total_sessions": exchange.total_sessions,
            },
        )

        if exchange.sessions_completed >= exchange.total_sessions:
            prior = exchange.status
            won = await exchange_crud.transition_status(
                self.db, exchange_id, OPEN_EXCHANGE_STATUSES, ExchangeStatus.COMPLETED
            )
            if won:
                await self._award_completion(exchange, ALL_SESSIONS_DESCRIPTION)
                exchange = await exchange_crud.get_by_id(self.db, exchange_id)
                logger.info(
                    "Exchange status changed",
                    extra={
                        "exchange_id": exchange_id,
                        "from_status": prior.value,
                        "to_status": ExchangeStatus.COMPLETED.value,
                        "trigger": "all_sessions_completed",
                    },
                )

        return exchange

    async def _award_completion(self, exchange: ExchangeModel, description: str) -> None:
        points = get_settings().exchange.completion_points
        await self.activities.log_activity(
            exchange.teacher_id,
            ActivityType.EXCHANGE,
            description.format(role="teacher"),
            points,
        )
        await self.activities.log_activity(
            exchange.student_id,
            ActivityType.EXCHANGE,
            description.format(role="student"),
            points,
        )

    async def list_for_user(self, user_id: int) -> list[dict]:
        """
        Exchanges the user takes part in, newest first.

        Returns:
            list[dict]: Exchange dicts with teacher_skill, student_skill,
                teacher_user and student_user attached
        """
        exchanges = await exchange_crud.get_by_user(self.db, user_id)

        skill_ids = [e.teacher_skill_id for e in exchanges] + [e.student_skill_id for e in exchanges]
        user_ids = [e.teacher_id for e in exchanges] + [e.student_id for e in exchanges]
        skills = await skill_crud.get_many(self.db, skill_ids)
        users = await user_crud.get_many(self.db, user_ids)

        result = []
        for exchange in exchanges:
            teacher_skill = skills.get(exchange.teacher_skill_id)
            student_skill = skills.get(exchange.student_skill_id)
            teacher = users.get(exchange.teacher_id)
            student = users.get(exchange.student_id)
            result.append(
                {
                    **exchange_to_dict(exchange),
                    "teacher_skill": skill_to_dict(teacher_skill) if teacher_skill else None,
                    "student_skill": skill_to_dict(student_skill) if student_skill else None,
                    "teacher_user": teacher.public_profile() if teacher else None,
                    "student_user": student.public_profile() if student else None,
                }
            )
        return result
