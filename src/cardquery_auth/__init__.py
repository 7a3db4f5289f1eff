"""CardQuery Auth - bearer credential checks for the search API.

This package is independent of the translation domain. It handles:
- Signed token verification (PyJWT, HS256, issuer check)
- Constant-time comparison of configured service/API secrets

Architecture:
    cardquery_auth/
    ├── services/           # JWT verification and the bearer gate
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from cardquery_auth import BearerAuthenticator, JWTService

    gate = BearerAuthenticator(JWTService(secret, issuer="cardquery"))
    principal = gate.authenticate(token)
"""

from cardquery_auth.exceptions import (
    AuthError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingCredentialsError,
)
from cardquery_auth.schemas import Principal, TokenPayload
from cardquery_auth.services import (
    API_ROLE,
    SERVICE_ROLE,
    BearerAuthenticator,
    JWTService,
)

__all__ = [
    # Services
    "BearerAuthenticator",
    "JWTService",
    "API_ROLE",
    "SERVICE_ROLE",
    # Schemas
    "Principal",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "ExpiredTokenError",
    "InvalidTokenError",
    "MissingCredentialsError",
]
