"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_engine(), get_session_factory(): Sync connection management (scripts)
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management

Dependencies: sqlalchemy, mathprep.configs
System role: Database adapter for profiles, questions, practice history and rewards
"""

from mathprep.boundary.db.base import Base, TimestampMixin, UUIDMixin
from mathprep.boundary.db.connection import (
    dispose_async_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "dispose_async_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "get_engine",
    "get_session_factory",
]
