"""Shared pydantic base for camelCase-serialized documents."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON form uses camelCase keys.

    Python code reads snake_case attributes; either spelling is accepted on
    input and ``model_dump(by_alias=True)`` produces the persisted form.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def new_id(prefix: str) -> str:
    """Return a fresh, never-reused identifier such as ``search-1f3a9c0b2d4e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
