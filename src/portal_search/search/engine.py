"""Search pipeline: score, filter, facet, sort/paginate, suggest.

The engine is stateless. Each call receives the collection explicitly and
returns a fresh :class:`SearchResult`; records are never copied or mutated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
import time
from typing import Any

from portal_search.domain.collections import CollectionProfile
from portal_search.domain.search import SearchOptions, SearchResult
from portal_search.search.analyzers import tokenize_query
from portal_search.search.facets import DEFAULT_FACET_LIMIT, calculate_facets
from portal_search.search.filters import apply_filters
from portal_search.search.pagination import sort_and_paginate
from portal_search.search.scorer import rank_records
from portal_search.search.suggestions import DEFAULT_SUGGESTION_LIMIT, generate_suggestions


logger = logging.getLogger(__name__)

_ANONYMOUS_PROFILE = CollectionProfile(name="records", store_key="records")


def coerce_options(options: SearchOptions | Mapping[str, Any] | None) -> SearchOptions:
    """Accept a :class:`SearchOptions`, a plain mapping, or ``None``."""
    if options is None:
        return SearchOptions()
    if isinstance(options, SearchOptions):
        return options
    return SearchOptions.model_validate(options)


class SearchEngine:
    """Runs the search pipeline over an in-memory collection."""

    def __init__(
        self,
        *,
        facet_limit: int = DEFAULT_FACET_LIMIT,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
    ) -> None:
        self.facet_limit = facet_limit
        self.suggestion_limit = suggestion_limit

    def search(
        self,
        records: Sequence[Any],
        query: str,
        options: SearchOptions | Mapping[str, Any] | None = None,
        profile: CollectionProfile | None = None,
    ) -> SearchResult:
        """Search ``records`` for ``query``.

        Args:
            records: The collection to scan (mappings, possibly nested)
            query: Free-text query; blank queries skip scoring entirely
            options: Scoring, filter, facet and pagination options
            profile: Defaults for fields, boosts and suggestion fields

        Returns:
            SearchResult with ``total_count`` taken before pagination
        """
        started = time.perf_counter()
        opts = coerce_options(options)
        profile = profile or _ANONYMOUS_PROFILE
        config = profile.build_config(opts)
        terms = tokenize_query(query)

        results = rank_records(records, terms, config)
        if opts.filters:
            results = apply_filters(results, opts.filters)

        facets = calculate_facets(results, opts.facets, limit=self.facet_limit) if opts.facets else []

        total_count = len(results)
        items = sort_and_paginate(
            results,
            order_by=opts.order_by,
            order_direction=opts.order_direction,
            offset=opts.offset,
            limit=opts.limit,
        )

        search_time = (time.perf_counter() - started) * 1000
        suggestions = generate_suggestions(
            query,
            records,
            profile.suggestion_fields or config.fields,
            limit=self.suggestion_limit,
        )

        logger.debug(
            "Searched %d %s for %d term(s): %d matched, %d returned in %.2fms",
            len(records),
            profile.name,
            len(terms),
            total_count,
            len(items),
            search_time,
        )

        return SearchResult(
            items=items,
            total_count=total_count,
            search_time=search_time,
            suggestions=suggestions,
            facets=facets,
        )
