"""Search service orchestration layer.

Loads collections from the key-value store, runs the engine, and turns any
exception into a failure response with an empty envelope. Provides the
high-level API used by the CLI and by embedding applications.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Mapping, Sequence
import logging
from typing import Any

from portal_search.adapters.store import AbstractKeyValueStore
from portal_search.config import Settings
from portal_search.domain.collections import DEFAULT_PROFILES, CollectionProfile
from portal_search.domain.search import (
    GlobalSearchResponse,
    GlobalSearchResult,
    SearchOptions,
    SearchResponse,
    SearchResult,
)
from portal_search.observability.context import collection_scope
from portal_search.observability.metrics import (
    SEARCH_ERROR_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUEST_COUNT,
    track_latency,
)
from portal_search.observability.tracing import create_span, record_search_outcome
from portal_search.search.engine import SearchEngine


logger = logging.getLogger(__name__)

OptionsLike = SearchOptions | Mapping[str, Any] | None
UNKNOWN_COLLECTION = "unknown"


class SearchService:
    """High-level search orchestration service.

    Each collection is searched independently; ``global_search`` fans out over
    every registered profile and sums the per-collection totals.
    """

    def __init__(
        self,
        store: AbstractKeyValueStore,
        *,
        profiles: Iterable[CollectionProfile] = DEFAULT_PROFILES,
        engine: SearchEngine | None = None,
        settings: Settings | None = None,
    ):
        """Initialize search service with dependencies.

        Args:
            store: Key-value store holding each collection under its profile's key
            profiles: Collections exposed by the service (default: recordings, notes, exercises)
            engine: Engine override; built from settings when omitted
            settings: Result-shaping limits (facet and suggestion caps)
        """
        settings = settings or Settings()
        self.store = store
        self.engine = engine or SearchEngine(
            facet_limit=settings.facet_limit,
            suggestion_limit=settings.suggestion_limit,
        )
        self.profiles: dict[str, CollectionProfile] = {profile.name: profile for profile in profiles}

    @property
    def collection_names(self) -> list[str]:
        return list(self.profiles)

    def search(
        self,
        records: Sequence[Any],
        query: str,
        options: OptionsLike = None,
        profile: CollectionProfile | None = None,
    ) -> SearchResponse:
        """Search an explicit collection; failures come back as a failure response."""
        name = profile.name if profile else "records"
        label = profile.label if profile else "Record"
        return self._execute(name, label, lambda: self.engine.search(records, query, options, profile))

    async def search_collection(self, name: str, query: str, options: OptionsLike = None) -> SearchResponse:
        """Search the collection registered under ``name``."""
        profile = self.profiles.get(name)
        label = profile.label if profile else name.capitalize()

        def run() -> SearchResult:
            if profile is None:
                raise ValueError(f"Unknown collection: {name}")
            records = self.store.get_array(profile.store_key)
            return self.engine.search(records, query, options, profile)

        # Unregistered names share one metric label
        metric_name = name if profile is not None else UNKNOWN_COLLECTION
        with collection_scope(name):
            return self._execute(metric_name, label, run)

    async def search_recordings(self, query: str, options: OptionsLike = None) -> SearchResponse:
        return await self.search_collection("recordings", query, options)

    async def search_notes(self, query: str, options: OptionsLike = None) -> SearchResponse:
        return await self.search_collection("notes", query, options)

    async def search_exercises(self, query: str, options: OptionsLike = None) -> SearchResponse:
        return await self.search_collection("exercises", query, options)

    async def global_search(self, query: str, options: OptionsLike = None) -> GlobalSearchResponse:
        """Search every collection concurrently and sum their totals.

        A collection that fails contributes its empty failure envelope (and
        therefore zero) without failing the whole call.
        """
        names = self.collection_names
        try:
            responses = await asyncio.gather(*(self.search_collection(name, query, options) for name in names))
            results = {name: response.data for name, response in zip(names, responses)}
            for name, response in zip(names, responses):
                if not response.success:
                    logger.warning("Global search: %s failed: %s", name, response.error)
            total = sum(result.total_count for result in results.values())
            return GlobalSearchResponse(data=GlobalSearchResult(results=results, total_results=total))
        except Exception as exc:
            logger.error("Global search failed: %s", exc, exc_info=True)
            return GlobalSearchResponse.failure(str(exc) or "Global search failed", names)

    def _execute(self, name: str, label: str, run: Callable[[], SearchResult]) -> SearchResponse:
        with create_span("search.collection", attributes={"search.collection": name}) as span:
            try:
                with track_latency(SEARCH_LATENCY, collection=name):
                    result = run()
            except Exception as exc:
                logger.error("%s search failed: %s", label, exc, exc_info=True)
                SEARCH_ERROR_COUNT.labels(collection=name, error_type=type(exc).__name__).inc()
                SEARCH_REQUEST_COUNT.labels(collection=name, status="error").inc()
                record_search_outcome(span, None, exc)
                return SearchResponse.failure(str(exc) or f"{label} search failed")

            SEARCH_REQUEST_COUNT.labels(collection=name, status="ok").inc()
            record_search_outcome(span, result)
            return SearchResponse(data=result)
