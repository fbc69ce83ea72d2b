from __future__ import annotations

import pytest

from talentsearch.schemas import SearchGroup, SearchQuery
from talentsearch.validation import (
    QueryValidationError,
    validate_query,
    validate_saved_search_name,
)


def test_saved_search_name_is_stripped():
    assert validate_saved_search_name("  React devs ") == "React devs"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_saved_search_name_is_rejected(name):
    with pytest.raises(QueryValidationError):
        validate_saved_search_name(name)


def test_validate_query_requires_groups_and_conditions():
    with pytest.raises(QueryValidationError) as exc:
        validate_query(SearchQuery(groups=[]))
    assert exc.value.errors == ["Must have at least one search group"]

    query = SearchQuery(
        groups=[
            SearchGroup(conditions=[{"field": "name", "operator": "contains", "value": "a"}]),
            SearchGroup(conditions=[]),
        ]
    )
    with pytest.raises(QueryValidationError) as exc:
        validate_query(query)
    assert exc.value.errors == ["group 2: must have at least one condition"]


def test_validate_query_accepts_malformed_clauses():
    query = SearchQuery(
        groups=[SearchGroup(conditions=[{"field": "hobby", "operator": "contains", "value": "x"}])]
    )

    validate_query(query)
