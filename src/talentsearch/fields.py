"""Searchable candidate fields and their typed accessors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    TEXT = "text"
    ENUM = "enum"
    NUMBER = "number"
    COLLECTION = "collection"


class SearchField(str, Enum):
    """Closed set of record attributes a condition may address."""

    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    POSITION = "position"
    LOCATION = "location"
    EXPERIENCE_LEVEL = "experienceLevel"
    STATUS = "status"
    SOURCE = "source"
    SKILLS = "skills"
    TAGS = "tags"
    EXPERIENCE_YEARS = "experienceYears"
    SALARY_MIN = "salaryMin"
    SALARY_MAX = "salaryMax"


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Reads one attribute from a record and normalizes it for comparison."""

    key: str
    attribute: str
    kind: FieldKind

    def extract(self, record: Any) -> Any:
        raw = self._read(record)
        if self.kind is FieldKind.TEXT:
            return raw.lower() if isinstance(raw, str) else raw
        if self.kind is FieldKind.COLLECTION:
            if isinstance(raw, (list, tuple)):
                return [item.lower() if isinstance(item, str) else item for item in raw]
            return raw
        # numeric and enumerated attributes are compared as stored
        return raw

    def _read(self, record: Any) -> Any:
        if isinstance(record, Mapping):
            if self.key in record:
                return record[self.key]
            return record.get(self.attribute)
        return getattr(record, self.attribute, None)


FIELD_ACCESSORS: dict[SearchField, FieldAccessor] = {
    SearchField.NAME: FieldAccessor("name", "name", FieldKind.TEXT),
    SearchField.EMAIL: FieldAccessor("email", "email", FieldKind.TEXT),
    SearchField.PHONE: FieldAccessor("phone", "phone", FieldKind.TEXT),
    SearchField.POSITION: FieldAccessor("position", "position", FieldKind.TEXT),
    SearchField.LOCATION: FieldAccessor("location", "location", FieldKind.TEXT),
    SearchField.EXPERIENCE_LEVEL: FieldAccessor(
        "experienceLevel", "experience_level", FieldKind.ENUM
    ),
    SearchField.STATUS: FieldAccessor("status", "status", FieldKind.ENUM),
    SearchField.SOURCE: FieldAccessor("source", "source", FieldKind.ENUM),
    SearchField.SKILLS: FieldAccessor("skills", "skills", FieldKind.COLLECTION),
    SearchField.TAGS: FieldAccessor("tags", "tags", FieldKind.COLLECTION),
    SearchField.EXPERIENCE_YEARS: FieldAccessor(
        "experienceYears", "experience_years", FieldKind.NUMBER
    ),
    SearchField.SALARY_MIN: FieldAccessor("salaryMin", "salary_min", FieldKind.NUMBER),
    SearchField.SALARY_MAX: FieldAccessor("salaryMax", "salary_max", FieldKind.NUMBER),
}


def resolve_field(field: str | SearchField) -> FieldAccessor | None:
    """Return the accessor for ``field`` or ``None`` when it is not searchable."""
    try:
        return FIELD_ACCESSORS[SearchField(field)]
    except ValueError:
        return None


__all__ = ["FieldAccessor", "FieldKind", "SearchField", "FIELD_ACCESSORS", "resolve_field"]
