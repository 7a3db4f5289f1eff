"""Tests for the API settings dependency."""

from cardquery.presentation.api.config import get_api_settings
from cardquery_config import clear_settings_cache


class TestGetApiSettings:
    def test_follows_settings_cache_reset(self, tmp_path, monkeypatch):
        """Clearing the settings cache also refreshes what routes see."""
        first_url = f"sqlite+aiosqlite:///{tmp_path / 'first.db'}"
        second_url = f"sqlite+aiosqlite:///{tmp_path / 'second.db'}"

        monkeypatch.setenv("DATABASE_URL", first_url)
        clear_settings_cache()
        assert get_api_settings().database_url == first_url

        monkeypatch.setenv("DATABASE_URL", second_url)
        clear_settings_cache()
        try:
            assert get_api_settings().database_url == second_url
        finally:
            monkeypatch.undo()
            clear_settings_cache()
