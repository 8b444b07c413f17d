"""Persistence gateway implementations"""

from .base import AirdropStore, StoreError, StoreUnavailable, UniqueViolation
from .memory import InMemoryStore
from .sql import SQLAlchemyStore

__all__ = [
    "AirdropStore",
    "StoreError",
    "StoreUnavailable",
    "UniqueViolation",
    "InMemoryStore",
    "SQLAlchemyStore",
]
