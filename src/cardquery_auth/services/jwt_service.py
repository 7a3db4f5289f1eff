"""JWT token service.

Verifies HS256-signed tokens issued for callers of the search API.
"""

from datetime import datetime, timedelta, timezone

import jwt

from cardquery_auth.exceptions import ExpiredTokenError, InvalidTokenError
from cardquery_auth.schemas import TokenPayload

DEFAULT_ROLE = "authenticated"


class JWTService:
    """Service for JWT token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key", issuer="cardquery")
    >>> token = service.create_token("client-1")
    >>> payload = service.verify_token(token)
    >>> print(payload.role)
    """

    DEFAULT_EXPIRE_HOURS = 1
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        expire_hours: int = DEFAULT_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        issuer
            Expected issuer. A token is accepted when its ``iss`` claim
            contains this value.
        expire_hours
            Hours until a created token expires (default 1)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._expire = timedelta(hours=expire_hours)

    def create_token(
        self,
        subject: str,
        role: str = DEFAULT_ROLE,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed token for ``subject``."""
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": subject,
            "role": role,
            "iss": self._issuer,
            "iat": now,
            "exp": now + (expires_delta if expires_delta is not None else self._expire),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        ExpiredTokenError
            If the token is past its expiry
        InvalidTokenError
            If the signature, issuer or payload shape is wrong
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp"]},
            )

            issuer = str(payload.get("iss", ""))
            if self._issuer not in issuer:
                raise InvalidTokenError()

            return TokenPayload(
                subject=str(payload.get("sub", "")),
                role=str(payload.get("role") or DEFAULT_ROLE),
                issuer=issuer,
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError() from e
