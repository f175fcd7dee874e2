"""Predicate filters applied after scoring.

A filter map associates a field path with one of:

- a literal: the field text must equal the literal's text rendering
- a list: the field text must equal one of the elements
- ``{"operator": ..., "value": ...}`` (or a :class:`FilterCondition`)

``None`` means "no constraint". All keys must hold (logical AND).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
import logging
import math
import operator
from typing import Any

from portal_search.domain.search import FilterCondition, FilterOp
from portal_search.search.fields import format_value, get_field_value


logger = logging.getLogger(__name__)


def to_number(value: Any) -> float:
    """Numeric coercion: blank text is 0, unparsable text is NaN."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


_NUMERIC_OPERATORS: dict[FilterOp, Callable[[float, float], bool]] = {
    FilterOp.GT: operator.gt,
    FilterOp.GTE: operator.ge,
    FilterOp.LT: operator.lt,
    FilterOp.LTE: operator.le,
}

_TEXT_OPERATORS: dict[FilterOp, Callable[[str, str], bool]] = {
    FilterOp.NE: operator.ne,
    FilterOp.EQ: operator.eq,
    FilterOp.CONTAINS: lambda item, expected: expected.lower() in item.lower(),
    FilterOp.STARTS_WITH: lambda item, expected: item.lower().startswith(expected.lower()),
    FilterOp.ENDS_WITH: lambda item, expected: item.lower().endswith(expected.lower()),
}


def evaluate(op: FilterOp, item_value: str, expected: Any) -> bool:
    """Apply ``op`` to a field's text and the expected value.

    Ordering operators compare numerically; the rest compare text.
    """
    if op.is_numeric:
        return _NUMERIC_OPERATORS[op](to_number(item_value), to_number(expected))
    return _TEXT_OPERATORS[op](item_value, format_value(expected))


def _as_condition(expected: Any) -> FilterCondition | None:
    if isinstance(expected, FilterCondition):
        return expected
    if isinstance(expected, Mapping) and expected.get("operator"):
        op = FilterOp.parse(expected["operator"])
        if op is FilterOp.EQ and expected["operator"] != FilterOp.EQ.value:
            logger.debug("Unknown filter operator %r, comparing for equality", expected["operator"])
        return FilterCondition(operator=op, value=expected.get("value"))
    return None


def matches_filter(record: Any, field_path: str, expected: Any) -> bool:
    """Check a single filter entry against a record."""
    if expected is None:
        return True

    item_value = get_field_value(record, field_path)

    if isinstance(expected, (list, tuple, set, frozenset)):
        return item_value in {format_value(option) for option in expected}

    condition = _as_condition(expected)
    if condition is not None:
        return evaluate(condition.operator, item_value, condition.value)

    if isinstance(expected, Mapping):
        # A mapping without an operator never equals field text
        return False

    return item_value == format_value(expected)


def apply_filters(records: Iterable[Any], filters: Mapping[str, Any] | None) -> list[Any]:
    """Keep records satisfying every filter entry."""
    if not filters:
        return list(records)
    return [
        record
        for record in records
        if all(matches_filter(record, field_path, expected) for field_path, expected in filters.items())
    ]
