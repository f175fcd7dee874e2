"""Analyzer utilities for the in-memory search engine.

Mirrors a composable tokenizer/filter design: a tokenizer emits tokens and
filters transform the stream. Queries, suggestion words and tracked popular
terms all go through small pipelines built here, so whitespace handling and
case folding stay consistent between them. No stemming, no stop words.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int

    def copy_with(self, **updates: object) -> Token:
        data: dict[str, object] = {"text": self.text, "position": self.position}
        data.update(updates)
        return Token(**data)  # type: ignore[arg-type]


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:  # pragma: no cover - interface definition
        ...


class WhitespaceTokenizer:
    """Splits on runs of whitespace; empty pieces never become tokens."""

    def __call__(self, text: str) -> Iterator[Token]:
        for position, piece in enumerate(text.split()):
            yield Token(text=piece, position=position)


class LowercaseFilter:
    """Filter that lowercases token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if token.text.islower():
                yield token
            else:
                yield token.copy_with(text=token.text.lower())


class MinLengthFilter:
    """Drops tokens shorter than ``min_length`` characters."""

    def __init__(self, min_length: int) -> None:
        self.min_length = min_length

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            if len(token.text) >= self.min_length:
                yield token


class UniqueFilter:
    """Keeps the first occurrence of each token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        seen: set[str] = set()
        for token in tokens:
            if token.text in seen:
                continue
            seen.add(token.text)
            yield token


class AnalyzerPipeline:
    """Composable analyzer pipeline (tokenizer + filters)."""

    def __init__(self, tokenizer: Tokenizer, filters: Sequence[TokenFilter] | None = None) -> None:
        self.tokenizer = tokenizer
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[Token]:
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = token_filter(stream)
        tokens = list(stream)
        for idx, token in enumerate(tokens):  # normalize positions post-filtering
            token.position = idx
        return tokens

    def terms(self, text: str) -> list[str]:
        """Convenience wrapper returning only token texts."""
        return [token.text for token in self(text)]


_QUERY_ANALYZER = AnalyzerPipeline(WhitespaceTokenizer(), [LowercaseFilter(), UniqueFilter()])


def tokenize_query(query: str) -> list[str]:
    """Split a free-text query into distinct lowercase terms, in order.

    >>> tokenize_query("  Quran  tafsir quran ")
    ['quran', 'tafsir']
    """
    if not query:
        return []
    return _QUERY_ANALYZER.terms(query)


def word_analyzer(min_length: int = 1) -> AnalyzerPipeline:
    """Analyzer for corpus words: whitespace split, lowercase, length floor."""
    filters: list[TokenFilter] = [LowercaseFilter()]
    if min_length > 1:
        filters.append(MinLengthFilter(min_length))
    return AnalyzerPipeline(WhitespaceTokenizer(), filters)
