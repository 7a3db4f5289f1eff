"""Tests for the Typer CLI."""

import pytest
from typer.testing import CliRunner

from cardquery.presentation.cli.app import app
from cardquery_config import clear_settings_cache

runner = CliRunner()


@pytest.fixture
def sqlite_database(tmp_path, monkeypatch):
    """Point the settings at a throwaway SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestTranslateCommands:
    """Offline translation commands."""

    def test_translate(self):
        result = runner.invoke(app, ["translate", "5 mana mono red creature"])

        assert result.exit_code == 0
        assert "c=r id=r t:creature mv=5" in result.output

    def test_translate_with_filters(self):
        result = runner.invoke(
            app,
            ["translate", "5 mana mono red creature", "--format", "Modern", "-c", "r"],
        )

        assert result.exit_code == 0
        assert "f:modern ci=r" in result.output

    def test_fallback(self):
        result = runner.invoke(app, ["fallback", "counterspells in blue"])

        assert result.exit_code == 0
        assert "otag:counter c:u" in result.output

    def test_query_is_required(self):
        result = runner.invoke(app, ["translate"])
        assert result.exit_code != 0


class TestMaintenanceCommands:
    """Jobs that open the configured database."""

    def test_mine_patterns_on_empty_log(self, sqlite_database):
        result = runner.invoke(app, ["mine-patterns", "--no-validate"])

        assert result.exit_code == 0, result.output
        assert "Pattern mining" in result.output

    def test_sweep_feedback(self, sqlite_database):
        result = runner.invoke(app, ["sweep-feedback"])

        assert result.exit_code == 0, result.output
        assert "Reclaimed" in result.output


class TestSecretsCommand:
    def test_generate(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY" in result.output
        assert "API_SECRET" in result.output
