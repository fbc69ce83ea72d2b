"""Persistence for saved searches and search history."""

from __future__ import annotations

from .history import SearchHistoryStore
from .repository import (
    CollectionCorruptedError,
    CollectionRepository,
    InMemoryRepository,
    JsonFileRepository,
)
from .saved_searches import SavedSearchStore

__all__ = [
    "CollectionCorruptedError",
    "CollectionRepository",
    "InMemoryRepository",
    "JsonFileRepository",
    "SavedSearchStore",
    "SearchHistoryStore",
]
