"""Root pytest configuration for test discovery and auto-skip behavior.

Test Structure:
    tests/
    ├── cardquery/             # Translation service tests
    │   ├── unit/              # Fast, isolated tests (in-memory stores)
    │   └── integration/       # API tests against a temporary SQLite file
    └── cardquery_auth/        # Bearer gate and token tests
        └── unit/

Environment Variables:
    RUN_EXTERNAL=1       Run tests that reach the live Scryfall/Ollama APIs
    RUN_ALL_TESTS=1      Run all tests (overrides other settings)

Pytest Options:
    --run-external       Run external service tests
    --run-all            Run all tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load a local env file first so developers can point tests elsewhere
CONFIG_DIR = PROJECT_ROOT / "config"
if (CONFIG_DIR / ".env.test").exists():
    load_dotenv(CONFIG_DIR / ".env.test")

# Required settings; must be in place before any cardquery import builds Settings
os.environ.setdefault(
    "JWT_SECRET_KEY",
    "test-jwt-secret-for-testing-only-0123456789abcdef",
)
os.environ.setdefault("API_SECRET", "test-api-secret-0123456789")
os.environ.setdefault("SERVICE_ROLE_KEY", "test-service-role-key-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from cardquery_config import clear_settings_cache  # noqa: E402


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-external",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.external",
    )
    parser.addoption(
        "--run-all",
        action="store_true",
        default=False,
        help="Run all tests regardless of markers",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that exercise the API and database together",
    )
    config.addinivalue_line(
        "markers",
        "external: Tests connecting to real external services (auto-skipped)",
    )
    config.addinivalue_line(
        "markers",
        "slow: Tests that take more than 1 second",
    )


def _enabled(config, option: str, env_var: str) -> bool:
    return config.getoption(option) or os.environ.get(env_var, "").lower() in (
        "1",
        "true",
        "yes",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip external tests unless explicitly enabled."""
    if _enabled(config, "--run-all", "RUN_ALL_TESTS"):
        return

    if _enabled(config, "--run-external", "RUN_EXTERNAL"):
        return

    skip_external = pytest.mark.skip(
        reason="External test - run with --run-external or RUN_EXTERNAL=1",
    )
    for item in items:
        if "external" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_external)


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the session with freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
