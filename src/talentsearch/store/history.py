"""Bounded, newest-first log of recent searches."""

from __future__ import annotations

import threading
from typing import Any, Mapping

import structlog

from ..schemas import SearchHistoryEntry
from ..schemas.base import new_id
from .repository import SEARCH_HISTORY_KEY, CollectionRepository
from .saved_searches import Clock, utc_now

DEFAULT_RETENTION = 50
DEFAULT_DISPLAY_LIMIT = 20


class SearchHistoryStore:
    """Append/read-only history; the stored collection never exceeds ``retention``."""

    def __init__(
        self,
        repository: CollectionRepository,
        *,
        clock: Clock | None = None,
        retention: int = DEFAULT_RETENTION,
        display_limit: int = DEFAULT_DISPLAY_LIMIT,
        key: str = SEARCH_HISTORY_KEY,
    ) -> None:
        self._repository = repository
        self._clock = clock or utc_now
        self._retention = retention
        self._display_limit = display_limit
        self._key = key
        self._lock = threading.RLock()
        self._logger = structlog.get_logger(__name__)

    @property
    def retention(self) -> int:
        return self._retention

    def append(
        self,
        search_query: str,
        filters: Mapping[str, Any] | None = None,
        result_count: int = 0,
    ) -> SearchHistoryEntry:
        entry = SearchHistoryEntry(
            id=new_id("history"),
            search_query=search_query,
            filters=dict(filters or {}),
            timestamp=self._clock(),
            result_count=result_count,
        )
        with self._lock:
            entries = [entry, *self._load()][: self._retention]
            self._save(entries)
        self._logger.debug("search_history.appended", entry_id=entry.id, result_count=result_count)
        return entry

    def list(self, limit: int | None = None) -> list[SearchHistoryEntry]:
        if limit is None:
            limit = self._display_limit
        with self._lock:
            return self._load()[: max(limit, 0)]

    def clear(self) -> None:
        with self._lock:
            self._save([])
        self._logger.info("search_history.cleared")

    def _load(self) -> list[SearchHistoryEntry]:
        raw = self._repository.load(self._key) or []
        return [SearchHistoryEntry.model_validate(item) for item in raw]

    def _save(self, entries: list[SearchHistoryEntry]) -> None:
        self._repository.save(
            self._key,
            [entry.model_dump(mode="json", by_alias=True) for entry in entries],
        )


__all__ = ["SearchHistoryStore", "DEFAULT_RETENTION", "DEFAULT_DISPLAY_LIMIT"]
