"""Single-condition evaluation against one candidate record."""

from __future__ import annotations

from typing import Any, Callable

from ..fields import resolve_field
from ..schemas.query import Condition, UnmatchableCondition, parse_condition

OperatorFn = Callable[[Any, Any], bool]


def matches(record: Any, condition: Condition | dict[str, Any]) -> bool:
    """Return whether ``record`` satisfies ``condition``.

    Text attributes, collection elements and string values are compared
    lower-cased. Anything the engine cannot interpret (unknown field, unknown
    operator, a value of the wrong type) yields ``False`` instead of raising.
    """
    parsed = parse_condition(condition)
    if isinstance(parsed, UnmatchableCondition):
        return False

    accessor = resolve_field(parsed.field)
    handler = _OPERATORS.get(parsed.operator)
    if accessor is None or handler is None:
        return False

    return handler(accessor.extract(record), _normalize_value(parsed.value))


def _normalize_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.lower()
    if isinstance(value, list):
        return [item.lower() if isinstance(item, str) else item for item in value]
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _contains(attribute: Any, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    if isinstance(attribute, list):
        return any(isinstance(item, str) and value in item for item in attribute)
    if isinstance(attribute, str):
        return value in attribute
    return False


def _equals(attribute: Any, value: Any) -> bool:
    if isinstance(attribute, list):
        return value in attribute
    return attribute == value


def _not_equals(attribute: Any, value: Any) -> bool:
    return not _equals(attribute, value)


def _starts_with(attribute: Any, value: Any) -> bool:
    return isinstance(attribute, str) and isinstance(value, str) and attribute.startswith(value)


def _ends_with(attribute: Any, value: Any) -> bool:
    return isinstance(attribute, str) and isinstance(value, str) and attribute.endswith(value)


def _in(attribute: Any, value: Any) -> bool:
    if not isinstance(value, list):
        return False
    if isinstance(attribute, list):
        return any(item in value for item in attribute)
    return attribute in value


def _not_in(attribute: Any, value: Any) -> bool:
    if not isinstance(value, list):
        return False
    return not _in(attribute, value)


def _greater_than(attribute: Any, value: Any) -> bool:
    return _is_number(attribute) and _is_number(value) and attribute > value


def _less_than(attribute: Any, value: Any) -> bool:
    return _is_number(attribute) and _is_number(value) and attribute < value


_OPERATORS: dict[str, OperatorFn] = {
    "contains": _contains,
    "equals": _equals,
    "not_equals": _not_equals,
    "starts_with": _starts_with,
    "ends_with": _ends_with,
    "in": _in,
    "not_in": _not_in,
    "greater_than": _greater_than,
    "less_than": _less_than,
}
