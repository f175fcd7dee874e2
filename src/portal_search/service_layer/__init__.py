"""Service layer - orchestration over the engine and the key-value store."""

from portal_search.service_layer.history_service import SearchHistoryService
from portal_search.service_layer.search_service import SearchService


__all__ = ["SearchHistoryService", "SearchService"]
