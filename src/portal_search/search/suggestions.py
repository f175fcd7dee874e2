"""Prefix suggestions drawn from the collection's own vocabulary."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from portal_search.search.analyzers import tokenize_query, word_analyzer
from portal_search.search.fields import get_field_value


DEFAULT_SUGGESTION_LIMIT = 5
MIN_SUGGESTION_LENGTH = 3

_WORDS = word_analyzer(min_length=MIN_SUGGESTION_LENGTH)


def generate_suggestions(
    query: str,
    records: Iterable[Any],
    fields: Sequence[str],
    limit: int = DEFAULT_SUGGESTION_LIMIT,
) -> list[str]:
    """Words from ``fields`` that start with the query's first term.

    Words shorter than three characters are ignored. Results are
    de-duplicated in discovery order and capped at ``limit``.
    """
    terms = tokenize_query(query)
    if not terms:
        return []
    prefix = terms[0]

    suggestions: dict[str, None] = {}
    for record in records:
        for field_path in fields:
            value = get_field_value(record, field_path)
            if not value:
                continue
            for word in _WORDS.terms(value):
                if word.startswith(prefix):
                    suggestions.setdefault(word, None)
                    if len(suggestions) >= limit:
                        return list(suggestions)
    return list(suggestions)
