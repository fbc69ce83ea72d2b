"""Caller-facing checks applied before a query is saved or run.

The evaluator and the stores accept anything; these rules belong to the
surfaces that build queries for people (CLI, builder UIs).
"""

from __future__ import annotations

from .schemas import SavedSearch, SearchQuery


class QueryValidationError(ValueError):
    """Raised when a query or saved-search definition is rejected."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_saved_search_name(name: str | None) -> str:
    """Return the stripped name, rejecting blank values."""
    stripped = (name or "").strip()
    if not stripped:
        raise QueryValidationError(["Please enter a name for this search"])
    return stripped


def validate_query(query: SearchQuery | SavedSearch) -> None:
    errors: list[str] = []
    if not query.groups:
        errors.append("Must have at least one search group")
    for index, group in enumerate(query.groups, start=1):
        if not group.conditions:
            errors.append(f"group {index}: must have at least one condition")
    if errors:
        raise QueryValidationError(errors)


__all__ = ["QueryValidationError", "validate_query", "validate_saved_search_name"]
