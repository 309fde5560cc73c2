"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management

Models live in workbench.boundary.db.models and CRUD singletons in
workbench.boundary.db.CRUD.

Dependencies: sqlalchemy, workbench.configs
System role: Database adapter for workspaces, groups, connectors and transcripts
"""

from workbench.boundary.db.base import Base, TimestampMixin, UUIDMixin, utcnow
from workbench.boundary.db.connection import (
    create_task_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from workbench.boundary.db import models  # noqa: F401  registers tables on Base.metadata

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "utcnow",
    "create_task_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
]
