"""Unit tests for query suggestions."""

import pytest

from portal_search.search.suggestions import generate_suggestions


@pytest.mark.unit
class TestGenerateSuggestions:
    def test_prefix_words_from_fields(self, sample_notes):
        suggestions = generate_suggestions("gram", sample_notes, ["title", "content"])

        assert suggestions == ["grammar"]

    def test_uses_first_term_only(self, sample_notes):
        suggestions = generate_suggestions("Qur tafsir", sample_notes, ["title"])

        assert suggestions == ["quran"]

    def test_ignores_short_words_and_dedups(self):
        records = [{"title": "Ta Tajweed tajweed Tafsir"}, {"title": "tamrin"}]

        assert generate_suggestions("ta", records, ["title"]) == ["tajweed", "tafsir", "tamrin"]

    def test_capped_at_limit(self):
        records = [{"title": " ".join(f"word{n}" for n in range(10))}]

        assert len(generate_suggestions("word", records, ["title"])) == 5
        assert generate_suggestions("word", records, ["title"], limit=2) == ["word0", "word1"]

    def test_blank_query_has_no_suggestions(self, sample_notes):
        assert generate_suggestions("   ", sample_notes, ["title"]) == []

    def test_array_fields_are_searched(self, sample_recordings):
        assert generate_suggestions("taj", sample_recordings, ["tags"]) == ["tajweed"]
