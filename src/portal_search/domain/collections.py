"""Collection profiles: per-collection scanning defaults."""

from pydantic import BaseModel, ConfigDict, Field

from portal_search.domain.search import SearchConfig, SearchOptions


class CollectionProfile(BaseModel):
    """Default fields, boosts and suggestion sources for one collection.

    Records for the collection live in the key-value store under ``store_key``.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    store_key: str = Field(min_length=1)
    fields: list[str] = Field(default_factory=list)
    boost: dict[str, float] = Field(default_factory=dict)
    suggestion_fields: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        """Singular display label, e.g. ``Recording`` for ``recordings``."""
        base = self.name[:-1] if self.name.endswith("s") else self.name
        return base[:1].upper() + base[1:]

    def build_config(self, options: SearchOptions) -> SearchConfig:
        """Merge call options over profile defaults (fields/boost replace wholesale)."""
        return SearchConfig(
            fields=options.fields or list(self.fields),
            case_sensitive=options.case_sensitive,
            fuzzy=options.fuzzy,
            boost=options.boost or dict(self.boost),
        )


RECORDINGS = CollectionProfile(
    name="recordings",
    store_key="recordings",
    fields=["title", "description", "tags"],
    boost={"title": 2, "tags": 1.5, "description": 1},
    suggestion_fields=["title", "description"],
)

NOTES = CollectionProfile(
    name="notes",
    store_key="notes",
    fields=["title", "content", "summary", "tags", "subject"],
    boost={"title": 3, "summary": 2, "tags": 1.5, "content": 1, "subject": 1.5},
    suggestion_fields=["title", "content", "summary"],
)

EXERCISES = CollectionProfile(
    name="exercises",
    store_key="exercises",
    fields=["title", "description", "tags"],
    boost={"title": 2, "tags": 1.5, "description": 1},
    suggestion_fields=["title", "description"],
)

DEFAULT_PROFILES: tuple[CollectionProfile, ...] = (RECORDINGS, NOTES, EXERCISES)
