"""Whole-collection persistence backends for the search stores."""

from __future__ import annotations

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

SAVED_SEARCHES_KEY = "saved_searches"
SEARCH_HISTORY_KEY = "search_history"


@runtime_checkable
class CollectionRepository(Protocol):
    """Loads and stores named collections as whole JSON arrays."""

    def load(self, key: str) -> list[dict[str, Any]] | None:
        """Return the stored collection, or ``None`` when ``key`` was never written."""

    def save(self, key: str, items: list[dict[str, Any]]) -> None:
        """Replace the collection stored under ``key``."""


class InMemoryRepository:
    """Process-local repository, mainly for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})

    def load(self, key: str) -> list[dict[str, Any]] | None:
        if key not in self._collections:
            return None
        return copy.deepcopy(self._collections[key])

    def save(self, key: str, items: list[dict[str, Any]]) -> None:
        self._collections[key] = copy.deepcopy(items)


class CollectionCorruptedError(ValueError):
    """Raised when a persisted collection is not a JSON array."""

    def __init__(self, path: Path, detail: str):
        super().__init__(f"Corrupted collection at {path}: {detail}")
        self.path = path


class JsonFileRepository:
    """Stores each collection as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, key: str) -> Path:
        return self._base_dir / f"{key}.json"

    def load(self, key: str) -> list[dict[str, Any]] | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise CollectionCorruptedError(path, str(exc)) from exc
        if not isinstance(data, list):
            raise CollectionCorruptedError(path, "expected a JSON array")
        return data

    def save(self, key: str, items: list[dict[str, Any]]) -> None:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = [
    "CollectionCorruptedError",
    "CollectionRepository",
    "InMemoryRepository",
    "JsonFileRepository",
    "SAVED_SEARCHES_KEY",
    "SEARCH_HISTORY_KEY",
]
