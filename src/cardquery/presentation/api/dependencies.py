"""FastAPI dependency injection for the CardQuery API.

Provides dependencies for:
- Database sessions
- Bearer authentication and rate limiting
- Process-wide singletons (result cache, in-flight guard, rate limiter,
  generative backend, live validator)
- Service instances
"""

import json
import logging
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cardquery.application.services import (
    FeedbackProcessor,
    PatternMiner,
    TranslationService,
)
from cardquery.domain.feedback import LiveValidator, RuleGenerator
from cardquery.domain.shared.exceptions import (
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)
from cardquery.infrastructure.cache import (
    InMemoryResultCache,
    SingleFlight,
    TieredResultCache,
)
from cardquery.infrastructure.integration.ai import OllamaRuleGenerator
from cardquery.infrastructure.integration.scryfall import ScryfallLiveValidator
from cardquery.infrastructure.persistence.sqlalchemy.repositories import (
    FeedbackRepositorySQLAlchemy,
    PersistentResultCache,
    RuleRepositorySQLAlchemy,
    TranslationLogRepositorySQLAlchemy,
)
from cardquery.infrastructure.security import (
    InMemoryRateLimitStore,
    RateLimiter,
    json_depth,
)
from cardquery.presentation.api.config import get_api_settings
from cardquery_auth import (
    AuthError,
    BearerAuthenticator,
    ExpiredTokenError,
    JWTService,
    Principal,
)
from cardquery_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Security scheme for bearer credentials
security = HTTPBearer(auto_error=False)

SESSION_HEADER = "X-Session-Id"


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite"):
        db_path = url.split("///")[-1]
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Process-wide Singletons
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_persistent_cache() -> PersistentResultCache:
    """Database-backed cache tier sharing the application engine."""
    settings = get_settings()
    return PersistentResultCache(
        get_session_maker(),
        min_confidence=settings.cache_min_confidence,
    )


@lru_cache(maxsize=1)
def get_result_cache() -> TieredResultCache:
    """Two-tier result cache shared by every request."""
    settings = get_settings()
    memory = InMemoryResultCache(
        max_entries=settings.cache_max_entries,
        sweep_interval=settings.cache_sweep_interval,
    )
    return TieredResultCache(
        memory,
        persistent=get_persistent_cache(),
        memory_ttl=timedelta(minutes=settings.cache_ttl_minutes),
        persistent_ttl=timedelta(hours=settings.persistent_cache_ttl_hours),
    )


@lru_cache(maxsize=1)
def get_single_flight() -> SingleFlight:
    """In-flight guard collapsing concurrent identical translations."""
    return SingleFlight()


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    """Fixed-window rate limiter backed by the in-process store."""
    settings = get_settings()
    store = InMemoryRateLimitStore(sweep_interval=settings.rate_limit_sweep_interval)
    return RateLimiter(
        store,
        per_key=settings.rate_limit_per_key,
        per_session=settings.rate_limit_per_session,
        global_limit=settings.rate_limit_global,
        window_seconds=settings.rate_limit_window_seconds,
    )


@lru_cache(maxsize=1)
def get_rule_generator() -> RuleGenerator:
    """Generative backend used by the feedback processor."""
    settings = get_settings()
    return OllamaRuleGenerator(
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout,
    )


@lru_cache(maxsize=1)
def get_live_validator() -> LiveValidator:
    """Live result counter against the external card database."""
    settings = get_settings()
    return ScryfallLiveValidator(
        base_url=settings.scryfall_base_url,
        timeout=settings.scryfall_timeout,
    )


# -----------------------------------------------------------------------------
# Authentication & Rate Limiting
# -----------------------------------------------------------------------------


def get_authenticator(
    settings: Settings = Depends(get_api_settings),
) -> BearerAuthenticator:
    """Get the bearer gate configured with API settings."""
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        issuer=settings.jwt_issuer,
    )
    return BearerAuthenticator(
        jwt_service,
        service_secret=(
            settings.service_role_key.get_secret_value()
            if settings.service_role_key
            else None
        ),
        api_secret=settings.api_secret.get_secret_value() if settings.api_secret else None,
    )


async def require_auth(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    authenticator: BearerAuthenticator = Depends(get_authenticator),
) -> Principal:
    """
    FastAPI dependency admitting a caller by bearer credential.

    Returns
    -------
    The admitted principal

    Raises
    ------
    UnauthorizedError
        If the credential is missing or matches none of the accepted kinds
    """
    token = credentials.credentials if credentials else None
    try:
        return authenticator.authenticate(token)
    except ExpiredTokenError as e:
        logger.info("Rejected expired token")
        raise UnauthorizedError(e.message, code=ErrorCode.TOKEN_EXPIRED) from e
    except AuthError as e:
        logger.info("Rejected credential: %s", e.message)
        raise UnauthorizedError(e.message) from e


# Type alias for the injected principal
CurrentPrincipal = Annotated[Principal, Depends(require_auth)]


async def _read_json_body(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        # Malformed bodies are rejected by request validation
        return None


def _client_key(request: Request, principal: Principal) -> str:
    if principal.subject:
        return f"{principal.role}:{principal.subject}"
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


async def enforce_rate_limit(
    request: Request,
    principal: CurrentPrincipal,
    limiter: RateLimiter = Depends(get_rate_limiter),
) -> None:
    """
    Count the request against the global, key and session windows.

    The session comes from the ``X-Session-Id`` header or, failing that,
    the ``sessionId`` field of a JSON body.

    Raises
    ------
    RateLimitExceededError
        With the retry-after of the exhausted window
    """
    session_id: Optional[str] = request.headers.get(SESSION_HEADER)
    if not session_id:
        body = await _read_json_body(request)
        if isinstance(body, dict) and isinstance(body.get("sessionId"), str):
            session_id = body["sessionId"]

    await limiter.enforce(_client_key(request, principal), session_id)


async def check_json_depth(
    request: Request,
    settings: Settings = Depends(get_api_settings),
) -> None:
    """
    Reject JSON bodies nested deeper than the configured limit.

    Raises
    ------
    ValidationError
        If the body is nested too deeply
    """
    body = await _read_json_body(request)
    if body is not None and json_depth(body) > settings.max_json_depth:
        raise ValidationError(
            f"Request body exceeds maximum nesting depth of {settings.max_json_depth}",
            code=ErrorCode.PAYLOAD_TOO_LARGE,
        )


# Gate applied to every versioned router, in order
REQUEST_GATE = [
    Depends(require_auth),
    Depends(enforce_rate_limit),
    Depends(check_json_depth),
]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


async def get_translation_service(
    session: DBSession,
    cache: TieredResultCache = Depends(get_result_cache),
    single_flight: SingleFlight = Depends(get_single_flight),
    settings: Settings = Depends(get_api_settings),
) -> TranslationService:
    """Get the translation service bound to the request session."""
    return TranslationService(
        rule_repository=RuleRepositorySQLAlchemy(session),
        log_repository=TranslationLogRepositorySQLAlchemy(session),
        cache=cache,
        single_flight=single_flight,
        rule_min_confidence=settings.rule_min_confidence,
        max_params=settings.max_params,
        max_compiled_length=settings.max_compiled_length,
        cache_salt=settings.cache_key_salt,
    )


async def get_feedback_processor(  # NOQA: PLR0913
    session: DBSession,
    cache: TieredResultCache = Depends(get_result_cache),
    rule_generator: RuleGenerator = Depends(get_rule_generator),
    live_validator: LiveValidator = Depends(get_live_validator),
    settings: Settings = Depends(get_api_settings),
) -> FeedbackProcessor:
    """Get the feedback processor bound to the request session."""
    return FeedbackProcessor(
        feedback_repository=FeedbackRepositorySQLAlchemy(session),
        rule_repository=RuleRepositorySQLAlchemy(session),
        rule_generator=rule_generator,
        live_validator=live_validator,
        cache=cache,
        min_confidence=settings.feedback_min_confidence,
        timeout_seconds=settings.feedback_timeout_seconds,
        stale_after=timedelta(minutes=settings.feedback_stale_minutes),
        fail_open=settings.validation_fail_open,
        cache_ttl=timedelta(days=settings.feedback_cache_ttl_days),
        cache_salt=settings.cache_key_salt,
    )


async def get_pattern_miner(
    session: DBSession,
    live_validator: LiveValidator = Depends(get_live_validator),
    settings: Settings = Depends(get_api_settings),
) -> PatternMiner:
    """Get the pattern miner bound to the request session."""
    return PatternMiner(
        log_repository=TranslationLogRepositorySQLAlchemy(session),
        rule_repository=RuleRepositorySQLAlchemy(session),
        live_validator=live_validator if settings.miner_live_validation else None,
        window=timedelta(days=settings.miner_window_days),
        log_limit=settings.miner_log_limit,
        min_occurrences=settings.miner_min_occurrences,
        min_confidence=settings.miner_min_confidence,
        max_new_rules=settings.miner_max_new_rules,
        fail_open=settings.validation_fail_open,
    )


# Type aliases for injected services
TranslationServiceDep = Annotated[TranslationService, Depends(get_translation_service)]
FeedbackProcessorDep = Annotated[FeedbackProcessor, Depends(get_feedback_processor)]
PatternMinerDep = Annotated[PatternMiner, Depends(get_pattern_miner)]
