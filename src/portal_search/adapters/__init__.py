"""Adapters layer - key-value store implementations.

Following Cosmic Python Chapter 2: Repository Pattern
Abstracts persistence of collections, history and term counts.
"""

from .store import (
    AbstractKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    build_store,
)


__all__ = [
    "AbstractKeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "build_store",
]
