"""Tests for JWTService and BearerAuthenticator."""

from datetime import timedelta

import jwt
import pytest

from cardquery_auth import (
    BearerAuthenticator,
    ExpiredTokenError,
    InvalidTokenError,
    JWTService,
    MissingCredentialsError,
    Principal,
)

SECRET = "unit-test-jwt-secret-0123456789abcdef"
SERVICE_SECRET = "service-secret-0123456789"
API_SECRET = "api-secret-0123456789"


@pytest.fixture
def jwt_service():
    return JWTService(secret_key=SECRET, issuer="cardquery")


@pytest.fixture
def authenticator(jwt_service):
    return BearerAuthenticator(
        jwt_service,
        service_secret=SERVICE_SECRET,
        api_secret=API_SECRET,
    )


class TestJWTService:
    """Tests for signed token creation and verification."""

    def test_round_trip(self, jwt_service):
        token = jwt_service.create_token("client-1", role="admin")

        payload = jwt_service.verify_token(token)

        assert payload.subject == "client-1"
        assert payload.role == "admin"
        assert payload.issuer == "cardquery"

    def test_default_role(self, jwt_service):
        payload = jwt_service.verify_token(jwt_service.create_token("client-1"))
        assert payload.role == "authenticated"

    def test_expired_token(self, jwt_service):
        token = jwt_service.create_token("client-1", expires_delta=timedelta(seconds=-10))

        with pytest.raises(ExpiredTokenError, match="Token expired"):
            jwt_service.verify_token(token)

    def test_wrong_secret(self, jwt_service):
        other = JWTService(secret_key="another-secret-0123456789abcdef01", issuer="cardquery")
        token = other.create_token("client-1")

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(token)

    def test_issuer_is_matched_by_containment(self, jwt_service):
        hosted = JWTService(secret_key=SECRET, issuer="https://auth.example/cardquery/v1")
        payload = jwt_service.verify_token(hosted.create_token("client-1"))
        assert payload.issuer == "https://auth.example/cardquery/v1"

    def test_foreign_issuer(self, jwt_service):
        foreign = JWTService(secret_key=SECRET, issuer="someone-else")

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(foreign.create_token("client-1"))

    def test_missing_expiry(self, jwt_service):
        token = jwt.encode({"sub": "client-1", "iss": "cardquery"}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            jwt_service.verify_token(token)

    def test_empty_secret_raises(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="", issuer="cardquery")


class TestBearerAuthenticator:
    """Tests for the three accepted credential kinds."""

    @pytest.mark.parametrize("credential", [None, "", "   "])
    def test_missing_credential(self, authenticator, credential):
        with pytest.raises(MissingCredentialsError, match="Missing Authorization header"):
            authenticator.authenticate(credential)

    def test_service_secret(self, authenticator):
        assert authenticator.authenticate(SERVICE_SECRET) == Principal(role="service")

    def test_api_secret(self, authenticator):
        assert authenticator.authenticate(API_SECRET) == Principal(role="api")

    def test_signed_token(self, authenticator, jwt_service):
        token = jwt_service.create_token("client-7")

        principal = authenticator.authenticate(token)

        assert principal == Principal(role="authenticated", subject="client-7")

    def test_malformed_token(self, authenticator):
        with pytest.raises(InvalidTokenError, match="Invalid Authorization token"):
            authenticator.authenticate("not-a-token")

    def test_unconfigured_secrets_are_never_matched(self, jwt_service):
        gate = BearerAuthenticator(jwt_service)
        with pytest.raises(InvalidTokenError):
            gate.authenticate(API_SECRET)
