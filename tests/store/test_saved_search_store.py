from __future__ import annotations

from datetime import datetime

import pendulum
import pytest
from pydantic import ValidationError

from talentsearch.schemas import SearchGroup
from talentsearch.store import InMemoryRepository, JsonFileRepository, SavedSearchStore
from talentsearch.store.repository import SAVED_SEARCHES_KEY


class StepClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self) -> None:
        self._current = pendulum.datetime(2025, 1, 1, 9, 0, tz="UTC")

    def __call__(self) -> datetime:
        self._current = self._current.add(minutes=1)
        return self._current


def build_groups() -> list[SearchGroup]:
    return [
        SearchGroup(
            id="g1",
            logical_operator="AND",
            conditions=[{"id": "c1", "field": "skills", "operator": "contains", "value": "react"}],
        )
    ]


@pytest.fixture
def store() -> SavedSearchStore:
    return SavedSearchStore(InMemoryRepository(), clock=StepClock(), seed_examples=False)


def test_first_access_seeds_examples_once():
    repository = InMemoryRepository()
    store = SavedSearchStore(repository, clock=StepClock())

    seeded = store.list()
    assert len(seeded) == 3
    assert all(s.use_count == 0 for s in seeded)
    assert all(isinstance(s.created_at, datetime) for s in seeded)

    for search in seeded:
        store.delete(search.id)
    assert store.list() == []
    assert SavedSearchStore(repository, clock=StepClock()).list() == []


def test_existing_data_suppresses_seeding():
    repository = InMemoryRepository({SAVED_SEARCHES_KEY: []})

    assert SavedSearchStore(repository).list() == []


def test_create_then_get_round_trips(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "OR", "Frontend pool")

    fetched = store.get(created.id)

    assert fetched is not None
    assert fetched.model_dump(mode="json") == created.model_dump(mode="json")
    assert created.use_count == 0
    assert created.created_at == created.updated_at
    assert created.last_used is None
    assert created.global_operator == "OR"
    assert created.description == "Frontend pool"


def test_store_does_not_validate_names(store: SavedSearchStore):
    created = store.create("", [], "AND")

    assert store.get(created.id) is not None


def test_update_merges_fields_and_refreshes_updated_at(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")

    updated = store.update(created.id, {"name": "React engineers", "globalOperator": "OR"})

    assert updated is not None
    assert updated.name == "React engineers"
    assert updated.global_operator == "OR"
    assert updated.groups == created.groups
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert store.get(created.id).name == "React engineers"


def test_update_with_no_changes_still_refreshes_updated_at(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")

    updated = store.update(created.id, {})

    assert updated.updated_at > created.updated_at


def test_update_ignores_usage_and_identity_fields(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")

    updated = store.update(created.id, {"id": "search-other", "useCount": 99, "name": "Renamed"})

    assert updated.id == created.id
    assert updated.use_count == 0
    assert updated.name == "Renamed"


def test_update_unknown_id_returns_none(store: SavedSearchStore):
    assert store.update("search-missing", {"name": "x"}) is None


@pytest.mark.parametrize(
    "changes",
    [
        {"name": None},
        {"globalOperator": "XOR"},
        {"groups": "not-a-list"},
    ],
)
def test_update_with_unusable_values_leaves_record_unchanged(store: SavedSearchStore, changes):
    created = store.create("React devs", build_groups(), "AND")

    result = store.update(created.id, changes)

    assert result.model_dump(mode="json") == created.model_dump(mode="json")
    assert store.get(created.id).model_dump(mode="json") == created.model_dump(mode="json")


def test_create_rejects_values_outside_the_typed_signature(store: SavedSearchStore):
    with pytest.raises(ValidationError):
        store.create("React devs", build_groups(), "XOR")

    assert store.list() == []


def test_delete_reports_whether_something_was_removed(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")
    before = store.list()

    assert store.delete("search-missing") is False
    assert store.list() == before
    assert store.delete(created.id) is True
    assert store.delete(created.id) is False
    assert store.get(created.id) is None


def test_record_usage_increments_and_stamps_last_used(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")

    store.record_usage(created.id)
    first = store.get(created.id)
    store.record_usage(created.id)
    second = store.get(created.id)

    assert first.use_count == 1
    assert second.use_count == 2
    assert second.last_used >= first.last_used
    assert second.updated_at == created.updated_at


def test_record_usage_on_deleted_search_is_noop(store: SavedSearchStore):
    created = store.create("React devs", build_groups(), "AND")
    store.delete(created.id)

    store.record_usage(created.id)

    assert store.get(created.id) is None
    assert store.list() == []


def test_most_used_orders_by_count_then_recency(store: SavedSearchStore):
    alpha = store.create("alpha", [], "AND")
    beta = store.create("beta", [], "AND")
    gamma = store.create("gamma", [], "AND")
    store.record_usage(alpha.id)
    store.record_usage(beta.id)
    store.record_usage(beta.id)
    store.record_usage(gamma.id)

    ranked = [s.name for s in store.most_used(limit=3)]

    assert ranked == ["beta", "gamma", "alpha"]
    assert [s.name for s in store.most_used(limit=1)] == ["beta"]


def test_json_repository_persists_across_store_instances(tmp_path):
    repository = JsonFileRepository(tmp_path)
    first = SavedSearchStore(repository, clock=StepClock(), seed_examples=False)
    created = first.create(
        "Broken clause kept",
        [
            {
                "id": "g1",
                "logicalOperator": "AND",
                "conditions": [{"id": "c1", "field": "hobby", "operator": "contains", "value": "chess"}],
            }
        ],
        "AND",
    )
    first.record_usage(created.id)

    reloaded = JsonFileRepository(tmp_path)
    second = SavedSearchStore(reloaded, seed_examples=False)
    fetched = second.get(created.id)

    assert fetched is not None
    assert fetched.use_count == 1
    assert isinstance(fetched.last_used, datetime)
    assert fetched.last_used > created.created_at
    raw = reloaded.load(SAVED_SEARCHES_KEY)
    assert raw[0]["groups"][0]["conditions"][0] == {
        "id": "c1",
        "field": "hobby",
        "operator": "contains",
        "value": "chess",
    }
    assert raw[0]["useCount"] == 1
    assert "lastUsed" in raw[0]
