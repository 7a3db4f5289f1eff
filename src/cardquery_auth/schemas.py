"""Auth schemas and data structures.

Simple data classes used for passing the authenticated principal
between the auth gate and the API layer.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TokenPayload:
    """Decoded payload of a verified signed token.

    Attributes
    ----------
    subject
        The token subject (user or client identifier)
    role
        Role claim, defaults to "authenticated"
    issuer
        The issuer claim as found in the token
    exp
        Token expiration timestamp
    """

    subject: str
    role: str
    issuer: str
    exp: datetime


@dataclass(frozen=True)
class Principal:
    """The caller identity admitted by the bearer gate.

    Attributes
    ----------
    role
        "service", "api" or the role claim of a signed token
    subject
        Stable identifier used as the rate-limit key when present
    """

    role: str
    subject: str | None = None
