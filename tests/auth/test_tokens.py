"""Tests for JWT issuing and verification."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import jwt
import pytest

from storefront_admin.auth.tokens import TokenError, TokenIssuer


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(
        secret_key="test-secret-key-with-enough-length-for-hs256",
        ttl_minutes=60,
        remember_ttl_minutes=60 * 24,
    )


@pytest.fixture
def admin() -> MagicMock:
    admin = MagicMock()
    admin.id = 7
    admin.email = "admin@example.com"
    return admin


class TestTokenIssuer:
    def test_issue_and_decode(self, issuer, admin):
        issued = issuer.issue(admin)
        claims = issuer.decode(issued.token)

        assert claims["sub"] == "7"
        assert claims["jti"] == issued.jti
        assert claims["email"] == "admin@example.com"
        assert claims["iss"] == "storefront-admin"

    def test_expires_in_is_positive_seconds(self, issuer, admin):
        issued = issuer.issue(admin)

        assert issued.expires_in == 3600
        assert issued.expires_at > datetime.now(UTC)

    def test_remember_uses_longer_ttl(self, issuer, admin):
        issued = issuer.issue(admin, remember=True)

        assert issued.expires_in == 60 * 24 * 60

    def test_remember_ttl_defaults_to_ttl(self, admin):
        issuer = TokenIssuer(secret_key="test-secret-key-with-enough-length-for-hs256", ttl_minutes=5)

        assert issuer.issue(admin, remember=True).expires_in == 300

    def test_each_token_has_unique_jti(self, issuer, admin):
        assert issuer.issue(admin).jti != issuer.issue(admin).jti

    def test_decode_rejects_wrong_secret(self, issuer, admin):
        other = TokenIssuer(secret_key="another-secret-key-with-enough-length-too")
        token = other.issue(admin).token

        with pytest.raises(TokenError):
            issuer.decode(token)

    def test_decode_rejects_expired_token(self, issuer):
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "iss": issuer.issuer,
                "aud": issuer.audience,
                "sub": "7",
                "jti": "abc",
                "iat": now - timedelta(hours=2),
                "nbf": now - timedelta(hours=2),
                "exp": now - timedelta(hours=1),
            },
            issuer.secret_key,
            algorithm="HS256",
        )

        with pytest.raises(TokenError):
            issuer.decode(token)

    def test_decode_rejects_wrong_audience(self, issuer, admin):
        other = TokenIssuer(secret_key=issuer.secret_key, audience="someone-else")

        with pytest.raises(TokenError):
            issuer.decode(other.issue(admin).token)

    def test_decode_rejects_garbage(self, issuer):
        with pytest.raises(TokenError):
            issuer.decode("not-a-token")
