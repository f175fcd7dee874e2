"""Domain layer - search value objects and collection profiles.

Following Cosmic Python principles, this layer contains:
- Value Objects: immutable option bags and result envelopes
- Collection profiles: per-collection defaults for scoring

No dependencies on infrastructure (no stores, no logging handlers).
"""

from portal_search.domain.collections import DEFAULT_PROFILES, EXERCISES, NOTES, RECORDINGS, CollectionProfile
from portal_search.domain.search import (
    Facet,
    FacetValue,
    FilterCondition,
    FilterOp,
    GlobalSearchResponse,
    GlobalSearchResult,
    PopularTerm,
    SearchConfig,
    SearchOptions,
    SearchResponse,
    SearchResult,
)


__all__ = [
    "DEFAULT_PROFILES",
    "EXERCISES",
    "NOTES",
    "RECORDINGS",
    "CollectionProfile",
    "Facet",
    "FacetValue",
    "FilterCondition",
    "FilterOp",
    "GlobalSearchResponse",
    "GlobalSearchResult",
    "PopularTerm",
    "SearchConfig",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
]
