"""Search query documents: conditions, groups and full queries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from ..fields import FieldKind, SearchField, resolve_field
from .base import CamelModel, new_id

LogicalOperator = Literal["AND", "OR"]
TextOperator = Literal["contains", "equals", "not_equals", "starts_with", "ends_with"]
NumericOperator = Literal["greater_than", "less_than"]
ListOperator = Literal["in", "not_in"]


class _ConditionBase(CamelModel):
    id: str = Field(default_factory=lambda: new_id("cond"))
    # Display-only; groups combine their conditions with the group operator.
    logical_operator: LogicalOperator | None = None

    model_config = ConfigDict(frozen=True, use_enum_values=True)


class TextCondition(_ConditionBase):
    """String comparison (``contains``, ``equals``, ``starts_with`` ...)."""

    field: SearchField
    operator: TextOperator
    value: StrictStr | StrictInt | StrictFloat


class NumericCondition(_ConditionBase):
    """Strict inequality against a numeric attribute."""

    field: SearchField
    operator: NumericOperator
    value: StrictInt | StrictFloat

    @field_validator("field")
    @classmethod
    def _require_numeric_field(cls, value: SearchField) -> SearchField:
        accessor = resolve_field(value)
        if accessor is None or accessor.kind is not FieldKind.NUMBER:
            raise ValueError(f"{value!s} is not a numeric field")
        return value


class ListCondition(_ConditionBase):
    """Membership of the attribute in a list of values."""

    field: SearchField
    operator: ListOperator
    value: list[StrictStr]


class UnmatchableCondition(_ConditionBase):
    """A condition whose field, operator or value could not be understood.

    The raw parts are kept so the condition serializes back exactly as it was
    written; it never matches any record.
    """

    field: Any = None
    operator: Any = None
    value: Any = None
    reason: str = Field(default="", exclude=True)


Condition = Union[TextCondition, NumericCondition, ListCondition, UnmatchableCondition]

_CONDITION_TYPES = (TextCondition, NumericCondition, ListCondition, UnmatchableCondition)

_typed_condition = TypeAdapter(
    Annotated[
        Union[TextCondition, NumericCondition, ListCondition],
        Field(discriminator="operator"),
    ]
)


def parse_condition(raw: Any) -> Condition:
    """Build a typed condition, degrading malformed input to ``UnmatchableCondition``."""
    if isinstance(raw, _CONDITION_TYPES):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    if not isinstance(raw, Mapping):
        return UnmatchableCondition(value=raw, reason="condition must be a mapping")

    payload = dict(raw)
    logical = _display_operator(payload.pop("logicalOperator", payload.pop("logical_operator", None)))
    if logical is not None:
        payload["logicalOperator"] = logical
    try:
        return _typed_condition.validate_python(payload)
    except ValidationError as exc:
        condition_id = payload.get("id")
        return UnmatchableCondition(
            id=str(condition_id) if condition_id is not None else new_id("cond"),
            field=payload.get("field"),
            operator=payload.get("operator"),
            value=payload.get("value"),
            logical_operator=logical,
            reason="; ".join(error["msg"] for error in exc.errors()),
        )


def _display_operator(value: Any) -> LogicalOperator | None:
    # Never evaluated, so an unreadable value is dropped rather than rejected.
    if isinstance(value, str) and value.upper() in ("AND", "OR"):
        return value.upper()
    return None


AnyCondition = Annotated[Condition, BeforeValidator(parse_condition)]


class SearchGroup(CamelModel):
    """One parenthesized clause: conditions joined by a single operator."""

    id: str = Field(default_factory=lambda: new_id("group"))
    conditions: list[AnyCondition] = Field(default_factory=list)
    logical_operator: LogicalOperator = "AND"


class SearchQuery(CamelModel):
    """Groups joined by the global operator."""

    groups: list[SearchGroup] = Field(default_factory=list)
    global_operator: LogicalOperator = "AND"


__all__ = [
    "AnyCondition",
    "Condition",
    "ListCondition",
    "LogicalOperator",
    "NumericCondition",
    "SearchGroup",
    "SearchQuery",
    "TextCondition",
    "UnmatchableCondition",
    "parse_condition",
]
