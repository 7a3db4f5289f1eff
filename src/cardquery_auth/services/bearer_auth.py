"""Bearer credential gate.

Accepts one of three credential kinds in an ``Authorization: Bearer``
header: the service secret, the API secret, or a signed token.
"""

import hmac

from cardquery_auth.exceptions import InvalidTokenError, MissingCredentialsError
from cardquery_auth.schemas import Principal
from cardquery_auth.services.jwt_service import JWTService

SERVICE_ROLE = "service"
API_ROLE = "api"


def _matches(candidate: str, secret: str | None) -> bool:
    if not secret:
        return False
    return hmac.compare_digest(candidate.encode(), secret.encode())


class BearerAuthenticator:
    """Resolve a bearer credential to a ``Principal``."""

    def __init__(
        self,
        jwt_service: JWTService,
        service_secret: str | None = None,
        api_secret: str | None = None,
    ):
        self._jwt = jwt_service
        self._service_secret = service_secret
        self._api_secret = api_secret

    def authenticate(self, credential: str | None) -> Principal:
        """Check a raw bearer credential.

        Parameters
        ----------
        credential
            Token portion of the Authorization header, or None when absent

        Returns
        -------
        The admitted principal

        Raises
        ------
        MissingCredentialsError
            If no credential was supplied
        InvalidTokenError
            If the credential matches none of the accepted kinds
        """
        if not credential:
            raise MissingCredentialsError()

        token = credential.strip()
        if not token:
            raise MissingCredentialsError()

        if _matches(token, self._service_secret):
            return Principal(role=SERVICE_ROLE)
        if _matches(token, self._api_secret):
            return Principal(role=API_ROLE)

        # Shape check before touching the signature
        if token.count(".") != 2:
            raise InvalidTokenError()

        payload = self._jwt.verify_token(token)
        return Principal(role=payload.role, subject=payload.subject or None)
