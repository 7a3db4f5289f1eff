"""Authentication exceptions.

These exceptions are raised by the cardquery_auth package and are
translated into 401 responses by the API layer.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class MissingCredentialsError(AuthError):
    """Raised when no bearer credential was supplied."""

    def __init__(self, message: str = "Missing Authorization header"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a bearer token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid Authorization token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a signed token is past its expiry."""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message)
