"""Settings dependency for the HTTP routers.

Routes depend on :func:`get_api_settings` rather than on
``cardquery_config`` directly, so tests can swap the limits, the Ollama
endpoint and the credentials through ``app.dependency_overrides``.
"""

from cardquery_config.settings import Settings, get_settings


def get_api_settings() -> Settings:
    """Settings used by the search, feedback and admin routes.

    Not cached here; ``get_settings`` already is, and
    ``clear_settings_cache`` must reach the API too.
    """
    return get_settings()
