"""Saved-search lifecycle: create, update, delete and usage tracking."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping

import pendulum
import structlog
from pydantic import ValidationError

from ..schemas import SavedSearch, SearchGroup
from ..schemas.base import new_id
from ..schemas.query import LogicalOperator
from .repository import SAVED_SEARCHES_KEY, CollectionRepository
from .seeds import example_searches

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return pendulum.now("UTC")


class SavedSearchStore:
    """Durable collection of named queries.

    Every mutation reads the whole collection, applies the change and writes
    the whole collection back while holding the store lock. Lookups of unknown
    ids never raise: they return ``None``/``False`` or do nothing.
    """

    # Fields that only the store itself may set.
    _PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "use_count", "last_used"})

    def __init__(
        self,
        repository: CollectionRepository,
        *,
        clock: Clock | None = None,
        seed_examples: bool = True,
        key: str = SAVED_SEARCHES_KEY,
    ) -> None:
        self._repository = repository
        self._clock = clock or utc_now
        self._seed_examples = seed_examples
        self._key = key
        self._lock = threading.RLock()
        self._logger = structlog.get_logger(__name__)

    def list(self) -> list[SavedSearch]:
        with self._lock:
            return self._load()

    def get(self, search_id: str) -> SavedSearch | None:
        with self._lock:
            return next((s for s in self._load() if s.id == search_id), None)

    def create(
        self,
        name: str,
        groups: Iterable[SearchGroup | Mapping[str, Any]],
        global_operator: LogicalOperator = "AND",
        description: str | None = None,
        *,
        is_default: bool | None = None,
    ) -> SavedSearch:
        with self._lock:
            searches = self._load()
            now = self._clock()
            search = SavedSearch(
                id=new_id("search"),
                name=name,
                description=description,
                groups=list(groups),
                global_operator=global_operator,
                is_default=is_default,
                created_at=now,
                updated_at=now,
                use_count=0,
            )
            searches.append(search)
            self._save(searches)
        self._logger.info("saved_search.created", search_id=search.id, name=search.name)
        return search

    def update(self, search_id: str, fields: Mapping[str, Any]) -> SavedSearch | None:
        """Merge ``fields`` (camelCase or snake_case keys) into a saved search.

        Returns ``None`` for an unknown id. Changes that would not form a valid
        saved search are dropped and the stored record is returned unchanged.
        """
        with self._lock:
            searches = self._load()
            index = self._index_of(searches, search_id)
            if index is None:
                return None

            current = searches[index]
            merged = current.model_dump()
            merged.update(self._normalize_changes(fields))
            merged["updated_at"] = self._clock()
            try:
                updated = SavedSearch.model_validate(merged)
            except ValidationError as exc:
                self._logger.warning(
                    "saved_search.update_rejected",
                    search_id=search_id,
                    errors=[error["msg"] for error in exc.errors()],
                )
                return current
            searches[index] = updated
            self._save(searches)
        self._logger.info("saved_search.updated", search_id=search_id, fields=sorted(fields))
        return updated

    def delete(self, search_id: str) -> bool:
        with self._lock:
            searches = self._load()
            remaining = [s for s in searches if s.id != search_id]
            if len(remaining) == len(searches):
                return False
            self._save(remaining)
        self._logger.info("saved_search.deleted", search_id=search_id)
        return True

    def record_usage(self, search_id: str) -> None:
        with self._lock:
            searches = self._load()
            index = self._index_of(searches, search_id)
            if index is None:
                return
            current = searches[index]
            searches[index] = current.model_copy(
                update={"use_count": current.use_count + 1, "last_used": self._clock()}
            )
            self._save(searches)
        self._logger.debug("saved_search.used", search_id=search_id)

    def most_used(self, limit: int = 5) -> list[SavedSearch]:
        """Saved searches by use count, ties going to the most recently used."""
        ranked = sorted(
            self.list(),
            key=lambda s: (s.use_count, s.last_used.timestamp() if s.last_used else float("-inf")),
            reverse=True,
        )
        return ranked[: max(limit, 0)]

    def _load(self) -> list[SavedSearch]:
        raw = self._repository.load(self._key)
        if raw is None:
            searches = example_searches(self._clock()) if self._seed_examples else []
            self._save(searches)
            self._logger.info("saved_search.seeded", count=len(searches))
            return searches
        return [SavedSearch.model_validate(item) for item in raw]

    def _save(self, searches: list[SavedSearch]) -> None:
        self._repository.save(
            self._key,
            [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in searches],
        )

    @staticmethod
    def _index_of(searches: list[SavedSearch], search_id: str) -> int | None:
        for index, search in enumerate(searches):
            if search.id == search_id:
                return index
        return None

    def _normalize_changes(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        names = {
            (info.alias or name): name for name, info in SavedSearch.model_fields.items()
        }
        names.update({name: name for name in SavedSearch.model_fields})
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            name = names.get(key)
            if name is None or name in self._PROTECTED_FIELDS:
                self._logger.debug("saved_search.update_ignored_field", field=key)
                continue
            changes[name] = value
        return changes


__all__ = ["SavedSearchStore", "utc_now"]
