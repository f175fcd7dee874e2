"""Domain models for search functionality.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- Domain logic lives in domain layer
- No infrastructure dependencies

Envelope models serialize with camelCase aliases (``totalCount``,
``searchTime``) so payloads keep the shape the portal front-end expects,
while Python callers keep using snake_case attribute names.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


_ENVELOPE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FilterOp(str, Enum):
    """Filter operators understood by the predicate filter.

    ``EQ`` is the explicit equality case; unknown operator names resolve to it.
    """

    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    NE = "ne"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    EQ = "eq"

    @classmethod
    def parse(cls, name: object) -> FilterOp:
        """Resolve an operator name, falling back to ``EQ`` for anything unknown."""
        if isinstance(name, FilterOp):
            return name
        try:
            return cls(str(name))
        except ValueError:
            return cls.EQ

    @property
    def is_numeric(self) -> bool:
        return self in (FilterOp.GT, FilterOp.GTE, FilterOp.LT, FilterOp.LTE)


class FilterCondition(BaseModel):
    """Operator-based predicate: ``{"operator": "gte", "value": 70}``."""

    model_config = ConfigDict(frozen=True)

    operator: FilterOp = FilterOp.EQ
    value: Any = None

    @field_validator("operator", mode="before")
    @classmethod
    def _parse_operator(cls, value: object) -> FilterOp:
        return FilterOp.parse(value)


class SearchConfig(BaseModel):
    """Scoring configuration for a single search pass."""

    model_config = ConfigDict(frozen=True)

    fields: list[str] = Field(default_factory=list)
    case_sensitive: bool = False
    fuzzy: bool = False
    boost: dict[str, float] = Field(default_factory=dict)

    @field_validator("boost")
    @classmethod
    def _check_boost(cls, value: dict[str, float]) -> dict[str, float]:
        for field_name, weight in value.items():
            if weight <= 0:
                raise ValueError(f"Boost for field '{field_name}' must be positive, got {weight}")
        return value

    def boost_for(self, field_name: str) -> float:
        """Return the boost weight for a field (1 when unspecified)."""
        return self.boost.get(field_name) or 1.0


class SearchOptions(BaseModel):
    """Per-call search options: scoring, filtering, faceting and pagination."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    fields: list[str] | None = None
    case_sensitive: bool = False
    fuzzy: bool = False
    boost: dict[str, float] | None = None
    filters: dict[str, Any] | None = None
    facets: list[str] | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
    order_by: str | None = None
    order_direction: Literal["asc", "desc"] = "asc"


class FacetValue(BaseModel):
    model_config = _ENVELOPE_CONFIG

    value: str
    count: int


class Facet(BaseModel):
    """Distinct-value histogram of one field over a result set."""

    model_config = _ENVELOPE_CONFIG

    field: str
    values: list[FacetValue] = Field(default_factory=list)


class SearchResult(BaseModel):
    """Result envelope of a single collection search.

    ``items`` holds the caller's record objects untouched, in ranked order.
    ``total_count`` is the filtered count before pagination.
    """

    model_config = _ENVELOPE_CONFIG

    items: list[Any] = Field(default_factory=list)
    total_count: int = 0
    search_time: float = 0.0
    suggestions: list[str] = Field(default_factory=list)
    facets: list[Facet] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> SearchResult:
        return cls()


class SearchResponse(BaseModel):
    """Outcome of a top-level collection search call."""

    model_config = _ENVELOPE_CONFIG

    data: SearchResult
    success: bool = True
    error: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def failure(cls, message: str) -> SearchResponse:
        return cls(data=SearchResult.empty(), success=False, error=message)


class GlobalSearchResult(BaseModel):
    """Independent per-collection results plus the combined total."""

    model_config = _ENVELOPE_CONFIG

    results: dict[str, SearchResult] = Field(default_factory=dict)
    total_results: int = 0


class GlobalSearchResponse(BaseModel):
    model_config = _ENVELOPE_CONFIG

    data: GlobalSearchResult
    success: bool = True
    error: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def failure(cls, message: str, collections: list[str]) -> GlobalSearchResponse:
        data = GlobalSearchResult(results={name: SearchResult.empty() for name in collections})
        return cls(data=data, success=False, error=message)


class PopularTerm(BaseModel):
    model_config = _ENVELOPE_CONFIG

    term: str
    count: int
