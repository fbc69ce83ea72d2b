"""Persisted saved-search and search-history documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import CamelModel
from .query import LogicalOperator, SearchGroup, SearchQuery


class SavedSearch(CamelModel):
    """A named, reusable query with usage statistics."""

    id: str
    name: str
    description: str | None = None
    groups: list[SearchGroup] = Field(default_factory=list)
    global_operator: LogicalOperator = "AND"
    is_default: bool | None = None
    created_at: datetime
    updated_at: datetime
    last_used: datetime | None = None
    use_count: int = 0

    def to_query(self) -> SearchQuery:
        return SearchQuery(groups=self.groups, global_operator=self.global_operator)


class SearchHistoryEntry(CamelModel):
    """One recent search as shown in the recent-searches panel."""

    id: str
    search_query: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
    result_count: int = 0
