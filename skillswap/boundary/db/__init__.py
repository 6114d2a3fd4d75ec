"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, IntIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - create_tables(): Schema bootstrap
  - *_crud singletons: Storage contract consumed by the exchange core

Dependencies: sqlalchemy, skillswap.configs
System role: Database adapter providing persistent storage for users, skills,
exchanges, sessions, reviews, activities and direct messages.
"""

from skillswap.boundary.db.base import Base, IntIDMixin, TimestampMixin
from skillswap.boundary.db.connection import (
    create_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)

__all__ = [
    # Base classes
    "Base",
    "IntIDMixin",
    "TimestampMixin",
    # Connection
    "create_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
