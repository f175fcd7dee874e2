"""Additive relevance scoring over configured record fields.

Each query term contributes per field:

- substring containment: ``CONTAINS_WEIGHT x boost``
- word-boundary match (``\\bterm``, case-insensitive): ``WORD_BOUNDARY_WEIGHT x boost``
- fuzzy match of the whole field text (opt-in): ``FUZZY_WEIGHT x boost``

When more than one term is contained in the same field, the field earns a
further ``matched_terms x MULTI_TERM_WEIGHT x boost``. Scores are not
normalized and the multi-term bonus stacks on top of the per-term points.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import re
from typing import Any

from portal_search.domain.search import SearchConfig
from portal_search.search.fields import get_field_value
from portal_search.search.fuzzy import is_fuzzy_match


CONTAINS_WEIGHT = 10.0
WORD_BOUNDARY_WEIGHT = 15.0
FUZZY_WEIGHT = 5.0
MULTI_TERM_WEIGHT = 5.0


@dataclass
class ScoredCandidate:
    """A record paired with its score for the current scoring pass."""

    record: Any
    score: float = 0.0
    matched_fields: list[str] = field(default_factory=list)

    def add_match(self, field_name: str, points: float) -> None:
        self.score += points
        if field_name not in self.matched_fields:
            self.matched_fields.append(field_name)


def _word_boundary_pattern(term: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(term), re.IGNORECASE)


def score_record(record: Any, terms: Sequence[str], config: SearchConfig) -> ScoredCandidate:
    """Score one record against already-tokenized query terms."""
    candidate = ScoredCandidate(record=record)
    patterns = [_word_boundary_pattern(term) for term in terms]

    for field_name in config.fields:
        value = get_field_value(record, field_name)
        if not value:
            continue

        text = value if config.case_sensitive else value.lower()
        boost = config.boost_for(field_name)
        contained = 0

        for term, pattern in zip(terms, patterns):
            if term in text:
                candidate.add_match(field_name, CONTAINS_WEIGHT * boost)
                contained += 1
            if config.fuzzy and is_fuzzy_match(text, term):
                candidate.add_match(field_name, FUZZY_WEIGHT * boost)
            if pattern.search(text):
                candidate.add_match(field_name, WORD_BOUNDARY_WEIGHT * boost)

        if contained > 1:
            candidate.score += contained * MULTI_TERM_WEIGHT * boost

    return candidate


def score_records(records: Iterable[Any], terms: Sequence[str], config: SearchConfig) -> list[ScoredCandidate]:
    """Return matching candidates ordered by descending score.

    Candidates scoring zero are dropped. Ties keep collection order.
    """
    scored = [score_record(record, terms, config) for record in records]
    matched = [candidate for candidate in scored if candidate.score > 0]
    matched.sort(key=lambda candidate: candidate.score, reverse=True)
    return matched


def rank_records(records: Sequence[Any], terms: Sequence[str], config: SearchConfig) -> list[Any]:
    """Ranked records for ``terms``; no terms means the collection as-is."""
    if not terms:
        return list(records)
    return [candidate.record for candidate in score_records(records, terms, config)]
