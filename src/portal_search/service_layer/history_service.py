"""Search history and popular-term bookkeeping."""

from __future__ import annotations

import logging

from portal_search.adapters.store import AbstractKeyValueStore
from portal_search.config import Settings
from portal_search.domain.search import PopularTerm
from portal_search.search.analyzers import word_analyzer


logger = logging.getLogger(__name__)

HISTORY_KEY = "search_history"
COUNTS_KEY = "search_counts"


class SearchHistoryService:
    """Most-recent-first query history and per-term usage counters.

    Both live in the key-value store, so they survive restarts whenever the
    store is durable.
    """

    def __init__(self, store: AbstractKeyValueStore, settings: Settings | None = None):
        settings = settings or Settings()
        self.store = store
        self.history_limit = settings.history_limit
        self.popular_terms_limit = settings.popular_terms_limit
        self._terms = word_analyzer(min_length=settings.min_tracked_term_length)

    def get_search_history(self) -> list[str]:
        return [entry for entry in self.store.get_array(HISTORY_KEY) if isinstance(entry, str)]

    def add_to_search_history(self, query: str) -> None:
        """Move ``query`` to the front of the history, dropping duplicates."""
        if not query.strip():
            return
        history = [entry for entry in self.get_search_history() if entry != query]
        updated = [query, *history][: self.history_limit]
        if not self.store.set_array(HISTORY_KEY, updated):
            logger.warning("Could not persist search history")

    def clear_search_history(self) -> None:
        self.store.set_array(HISTORY_KEY, [])

    def track_search_term(self, query: str) -> None:
        """Count each sufficiently long query term once per occurrence."""
        if not query.strip():
            return
        counts = self._load_counts()
        for term in self._terms.terms(query):
            counts[term] = counts.get(term, 0) + 1
        if not self.store.set(COUNTS_KEY, counts):
            logger.warning("Could not persist search term counts")

    def get_popular_search_terms(self) -> list[PopularTerm]:
        ranked = sorted(self._load_counts().items(), key=lambda item: item[1], reverse=True)
        return [PopularTerm(term=term, count=count) for term, count in ranked[: self.popular_terms_limit]]

    def _load_counts(self) -> dict[str, int]:
        stored = self.store.get(COUNTS_KEY)
        if not isinstance(stored, dict):
            return {}
        return {str(term): int(count) for term, count in stored.items() if isinstance(count, (int, float))}
