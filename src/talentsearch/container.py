"""Dependency injection container for the search engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dependency_injector import containers, providers

from .core import QueryEvaluator, matches
from .pipeline import SearchPipeline
from .store import InMemoryRepository, JsonFileRepository, SavedSearchStore, SearchHistoryStore
from .store.history import DEFAULT_DISPLAY_LIMIT, DEFAULT_RETENTION


class SearchContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(
        default={
            "seed_examples": True,
            "history": {
                "retention": DEFAULT_RETENTION,
                "display_limit": DEFAULT_DISPLAY_LIMIT,
            },
        }
    )

    repository = providers.Singleton(InMemoryRepository)

    predicate = providers.Object(matches)

    query_evaluator = providers.Singleton(QueryEvaluator, predicate=predicate)

    saved_search_store = providers.Singleton(
        SavedSearchStore,
        repository=repository,
        seed_examples=config.seed_examples,
    )

    history_store = providers.Singleton(
        SearchHistoryStore,
        repository=repository,
        retention=config.history.retention,
        display_limit=config.history.display_limit,
    )

    pipeline = providers.Factory(
        SearchPipeline,
        evaluator=query_evaluator,
        saved_searches=saved_search_store,
        history=history_store,
    )


def create_container(
    *,
    settings: dict[str, Any] | None = None,
    data_dir: str | Path | None = None,
) -> SearchContainer:
    """Instantiate container with optional overrides.

    ``data_dir`` takes precedence over ``storage.path`` from settings. Without
    either, collections live in memory for the lifetime of the container.
    """

    container = SearchContainer()
    settings = settings if isinstance(settings, dict) else {}

    overrides = {key: settings[key] for key in ("seed_examples", "history") if key in settings}
    if overrides:
        container.config.from_dict(overrides)

    storage = settings.get("storage", {}) or {}
    backend = storage.get("backend", "json")
    path = data_dir or storage.get("path")

    if backend == "json" and path:
        container.repository.override(
            providers.Singleton(JsonFileRepository, base_dir=Path(path))
        )

    return container
