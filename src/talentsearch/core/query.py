"""Group and query evaluation over candidate collections."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence, TypeVar

from ..schemas import SavedSearch, SearchGroup, SearchQuery
from ..schemas.query import LogicalOperator
from .predicate import matches

RecordT = TypeVar("RecordT")
Predicate = Callable[[Any, Any], bool]


def match_group(record: Any, group: SearchGroup, *, predicate: Predicate = matches) -> bool:
    """Apply the group's operator across its conditions; empty groups match."""
    if not group.conditions:
        return True
    results = (predicate(record, condition) for condition in group.conditions)
    if group.logical_operator == "OR":
        return any(results)
    return all(results)


def match_query(
    record: Any,
    groups: Sequence[SearchGroup],
    global_operator: LogicalOperator = "AND",
    *,
    predicate: Predicate = matches,
) -> bool:
    """Apply ``global_operator`` across group results; no groups matches everything."""
    if not groups:
        return True
    results = (match_group(record, group, predicate=predicate) for group in groups)
    if global_operator == "OR":
        return any(results)
    return all(results)


def filter_records(
    records: Iterable[RecordT],
    groups: Sequence[SearchGroup],
    global_operator: LogicalOperator = "AND",
    *,
    predicate: Predicate = matches,
) -> list[RecordT]:
    """Return the matching records in input order as a new list."""
    return [
        record
        for record in records
        if match_query(record, groups, global_operator, predicate=predicate)
    ]


class QueryEvaluator:
    """Stateless evaluator bound to a predicate implementation."""

    def __init__(self, *, predicate: Predicate | None = None) -> None:
        self._predicate = predicate or matches

    def matches(self, record: Any, condition: Any) -> bool:
        return self._predicate(record, condition)

    def match_group(self, record: Any, group: SearchGroup) -> bool:
        return match_group(record, group, predicate=self._predicate)

    def match_query(
        self,
        record: Any,
        groups: Sequence[SearchGroup],
        global_operator: LogicalOperator = "AND",
    ) -> bool:
        return match_query(record, groups, global_operator, predicate=self._predicate)

    def filter(
        self,
        records: Iterable[RecordT],
        groups: Sequence[SearchGroup],
        global_operator: LogicalOperator = "AND",
    ) -> list[RecordT]:
        return filter_records(records, groups, global_operator, predicate=self._predicate)

    def evaluate(
        self,
        records: Iterable[RecordT],
        query: SearchQuery | SavedSearch,
    ) -> list[RecordT]:
        """Filter ``records`` with a query document or a saved search."""
        return self.filter(records, query.groups, query.global_operator)
