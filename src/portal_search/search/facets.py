"""Facet aggregation over a result set."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from portal_search.domain.search import Facet, FacetValue
from portal_search.search.fields import format_value, resolve_path


DEFAULT_FACET_LIMIT = 10


def _facet_values(record: Any, field_path: str) -> list[str]:
    raw = resolve_path(record, field_path)
    if isinstance(raw, (list, tuple)):
        return [text for text in (format_value(item) for item in raw) if text]
    text = format_value(raw)
    return [text] if text else []


def calculate_facets(
    records: Iterable[Any],
    facet_fields: Sequence[str],
    limit: int = DEFAULT_FACET_LIMIT,
) -> list[Facet]:
    """Count distinct values per field, most frequent first.

    List values count once per element. Ties keep first-seen order. Fields
    without any value still produce an empty facet.
    """
    records = list(records)
    facets: list[Facet] = []
    for field_path in facet_fields:
        counts: Counter[str] = Counter()
        for record in records:
            counts.update(_facet_values(record, field_path))
        # Counter keeps insertion order, sorted() is stable
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
        facets.append(
            Facet(field=field_path, values=[FacetValue(value=value, count=count) for value, count in ranked])
        )
    return facets
