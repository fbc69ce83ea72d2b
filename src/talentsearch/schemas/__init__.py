"""Pydantic schema definitions for search documents and candidate records."""

from __future__ import annotations

from .candidate import CandidateRecord
from .query import (
    Condition,
    ListCondition,
    LogicalOperator,
    NumericCondition,
    SearchGroup,
    SearchQuery,
    TextCondition,
    UnmatchableCondition,
    parse_condition,
)
from .saved_search import SavedSearch, SearchHistoryEntry

__all__ = [
    "CandidateRecord",
    "Condition",
    "ListCondition",
    "LogicalOperator",
    "NumericCondition",
    "SavedSearch",
    "SearchGroup",
    "SearchHistoryEntry",
    "SearchQuery",
    "TextCondition",
    "UnmatchableCondition",
    "parse_condition",
]
