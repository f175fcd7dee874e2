"""Stable sorting and offset/limit slicing."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from portal_search.search.fields import get_field_value


def sort_records(
    records: Sequence[Any],
    order_by: str | None,
    order_direction: Literal["asc", "desc"] = "asc",
) -> list[Any]:
    """Sort by the text of ``order_by``; equal keys keep their input order."""
    if not order_by:
        return list(records)
    return sorted(
        records,
        key=lambda record: get_field_value(record, order_by),
        reverse=order_direction == "desc",
    )


def paginate(records: Sequence[Any], offset: int = 0, limit: int | None = None) -> list[Any]:
    if limit is not None:
        return list(records[offset : offset + limit])
    if offset > 0:
        return list(records[offset:])
    return list(records)


def sort_and_paginate(
    records: Sequence[Any],
    *,
    order_by: str | None = None,
    order_direction: Literal["asc", "desc"] = "asc",
    offset: int = 0,
    limit: int | None = None,
) -> list[Any]:
    return paginate(sort_records(records, order_by, order_direction), offset=offset, limit=limit)
