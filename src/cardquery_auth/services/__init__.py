"""Authentication services.

Provides signed-token verification and the bearer credential gate.
"""

from cardquery_auth.services.bearer_auth import (
    API_ROLE,
    SERVICE_ROLE,
    BearerAuthenticator,
)
from cardquery_auth.services.jwt_service import JWTService

__all__ = [
    "API_ROLE",
    "SERVICE_ROLE",
    "BearerAuthenticator",
    "JWTService",
]
