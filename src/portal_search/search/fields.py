"""Field access for loosely-typed records.

Records are plain mappings. Field paths use dots for nesting
(``"teacher.name"``); a numeric segment indexes into a list
(``"attachments.0.title"``). Every step is guarded: a missing key, a
``None`` value or an out-of-range index ends the walk with ``None``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import math
from typing import Any


_MISSING = object()


def resolve_path(record: Any, path: str) -> Any:
    """Return the raw value at ``path`` or ``None`` when any segment is absent."""
    value: Any = record
    for key in path.split("."):
        value = _step(value, key)
        if value is _MISSING or value is None:
            return None
    return value


def _step(value: Any, key: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(key, _MISSING)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)) and key.isdigit():
        index = int(key)
        return value[index] if index < len(value) else _MISSING
    return _MISSING


def format_value(value: Any) -> str:
    """Render a raw field value as text.

    Lists are space-joined, booleans are ``true``/``false`` and integral
    floats drop their fractional part, so ``70`` and ``70.0`` render alike.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return " ".join(format_value(item) for item in value)
    return str(value)


def get_field_value(record: Any, path: str) -> str:
    """Textual value of a field; missing values yield an empty string."""
    return format_value(resolve_path(record, path))
