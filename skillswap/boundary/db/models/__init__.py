"""
Database models package.

Exports:
  - UserModel, SkillModel: Profiles and skill listings
  - ExchangeModel, SessionModel: Exchange lifecycle entities
  - ReviewModel: Peer ratings
  - ActivityModel, ActivityType: Activity log / point ledger
  - DirectMessageModel: Real-time direct messages

Dependencies: sqlalchemy, skillswap.boundary.db.base
System role: Database model definitions for domain entities
"""

from skillswap.boundary.db.models.user_model import UserModel
from skillswap.boundary.db.models.skill_model import SkillModel
from skillswap.boundary.db.models.exchange_model import ExchangeModel
from skillswap.boundary.db.models.session_model import SessionModel
from skillswap.boundary.db.models.review_model import ReviewModel
from skillswap.boundary.db.models.activity_model import ActivityModel, ActivityType
from skillswap.boundary.db.models.direct_message_model import DirectMessageModel

__all__ = [
    "UserModel",
    "SkillModel",
    "ExchangeModel",
    "SessionModel",
    "ReviewModel",
    "ActivityModel",
    "ActivityType",
    "DirectMessageModel",
]
