"""Core query evaluation components."""

from __future__ import annotations

from .predicate import matches
from .query import QueryEvaluator, filter_records, match_group, match_query

__all__ = [
    "QueryEvaluator",
    "filter_records",
    "match_group",
    "match_query",
    "matches",
]
