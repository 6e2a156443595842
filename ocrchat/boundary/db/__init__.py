"""Relational persistence: declarative base, engine, models and CRUD."""

from ocrchat.boundary.db.base import Base
from ocrchat.boundary.db.connection import (
    create_tables,
    dispose_engine,
    get_async_db,
    get_async_engine,
)

__all__ = [
    "Base",
    "create_tables",
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
]
