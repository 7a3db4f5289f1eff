"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. CARDQUERY_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CORS_WILDCARD = "*"


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. CARDQUERY_ENV_FILE env var (full or project-relative path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("CARDQUERY_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (jwt_secret_key MUST be set)
    jwt_secret_key: SecretStr
    jwt_issuer: str = "cardquery"
    service_role_key: SecretStr | None = None
    api_secret: SecretStr | None = None

    # Application
    app_name: str = "CardQuery"
    database_url: str = "sqlite+aiosqlite:///./data/cardquery.db"

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = CORS_WILDCARD

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # Input limits
    max_query_length: int = 500
    max_params: int = 15
    max_compiled_length: int = 400
    max_json_depth: int = 10

    # Rate limiting (fixed windows)
    rate_limit_per_key: int = 30
    rate_limit_per_session: int = 20
    rate_limit_global: int = 1000
    rate_limit_window_seconds: float = 60.0
    rate_limit_sweep_interval: int = 100

    # Result cache
    cache_ttl_minutes: int = 30
    cache_max_entries: int = 1000
    cache_sweep_interval: int = 50
    persistent_cache_ttl_hours: int = 48
    feedback_cache_ttl_days: int = 7
    cache_min_confidence: float = 0.65
    cache_key_salt: str = "v1"

    # Rule store
    rule_min_confidence: float = 0.6
    rule_lookup_limit: int = 50

    # Generative backend (Ollama)
    llm_base_url: str = "http://localhost:11434"
    llm_model: str = "qwen2.5:3b"
    llm_timeout: float = 30.0

    # Live validation against the external card search API
    scryfall_base_url: str = "https://api.scryfall.com"
    scryfall_timeout: float = 10.0
    validation_fail_open: bool = True

    # Feedback processor
    feedback_min_confidence: float = 0.5
    feedback_timeout_seconds: float = 60.0
    feedback_stale_minutes: int = 10

    # Pattern miner
    miner_window_days: int = 30
    miner_log_limit: int = 5000
    miner_min_occurrences: int = 3
    miner_min_confidence: float = 0.8
    miner_max_new_rules: int = 50
    miner_live_validation: bool = True

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        origins = [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]
        return origins or [CORS_WILDCARD]

    @property
    def database_type(self) -> str:
        """Database dialect name derived from the URL."""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    The required field (jwt_secret_key) must be provided via environment
    variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
