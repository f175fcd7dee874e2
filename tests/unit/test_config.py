"""Unit tests for Settings loading."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from portal_search.config import Settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.history_limit == 20
        assert settings.popular_terms_limit == 10
        assert settings.min_tracked_term_length == 3
        assert settings.suggestion_limit == 5
        assert settings.facet_limit == 10
        assert settings.get_store_path() is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HISTORY_LIMIT", "5")
        monkeypatch.setenv("LOG_JSON", "false")

        settings = Settings()

        assert settings.history_limit == 5
        assert settings.log_json is False

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " DEBUG ")
        assert Settings().log_level == "debug"

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("name", ["HISTORY_LIMIT", "FACET_LIMIT", "SUGGESTION_LIMIT"])
    def test_limits_must_be_positive(self, monkeypatch, name):
        monkeypatch.setenv(name, "0")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize(("name", "value"), [("FACET_LIMIT", "11"), ("SUGGESTION_LIMIT", "6")])
    def test_result_caps_cannot_be_raised(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings()

    def test_store_path_expands_user(self, monkeypatch):
        monkeypatch.setenv("STORE_PATH", "~/portal.json")

        assert Settings().get_store_path() == Path("~/portal.json").expanduser()

    def test_blank_store_path_means_memory(self):
        assert Settings(store_path="   ").get_store_path() is None

    def test_unknown_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("PORTAL_UNRELATED", "1")
        Settings()
