"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from skillswap.boundary.db.CRUD import exchange_crud, session_crud

    # Use singleton instances
    exchange = await exchange_crud.get_by_id(db, exchange_id)

    # Or instantiate classes directly for custom behavior
    from skillswap.boundary.db.CRUD import ExchangeCRUD
    custom_crud = ExchangeCRUD()
"""

from skillswap.boundary.db.CRUD.base_crud import BaseCRUD
from skillswap.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from skillswap.boundary.db.CRUD.skill_crud import SkillCRUD, skill_crud
from skillswap.boundary.db.CRUD.exchange_crud import ExchangeCRUD, exchange_crud
from skillswap.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from skillswap.boundary.db.CRUD.review_crud import ReviewCRUD, review_crud
from skillswap.boundary.db.CRUD.activity_crud import ActivityCRUD, activity_crud
from skillswap.boundary.db.CRUD.direct_message_crud import (
    DirectMessageCRUD,
    direct_message_crud,
)

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "SkillCRUD",
    "skill_crud",
    "ExchangeCRUD",
    "exchange_crud",
    "SessionCRUD",
    "session_crud",
    "ReviewCRUD",
    "review_crud",
    "ActivityCRUD",
    "activity_crud",
    "DirectMessageCRUD",
    "direct_message_crud",
]
