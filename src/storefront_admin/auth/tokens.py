"""JWT issuing and verification for admin sessions."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from jwt.exceptions import InvalidTokenError

from ..config import Settings
from ..logging import get_logger

if TYPE_CHECKING:
    from ..dbmodels import Admins

logger = get_logger(__name__)


class TokenError(Exception):
    """Raised when a bearer token cannot be verified."""

    pass


@dataclass(frozen=True)
class IssuedToken:
    token: str
    jti: str
    expires_at: datetime
    ttl_minutes: int

    @property
    def expires_in(self) -> int:
        """Lifetime in seconds."""
        return self.ttl_minutes * 60


class TokenIssuer:
    """Self-issued HS256 tokens identifying an admin by ``sub``."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "storefront-admin",
        audience: str = "storefront-admin-api",
        ttl_minutes: int = 60,
        remember_ttl_minutes: int | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.ttl_minutes = ttl_minutes
        self.remember_ttl_minutes = remember_ttl_minutes or ttl_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenIssuer:
        return cls(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            ttl_minutes=settings.jwt_ttl_minutes,
            remember_ttl_minutes=settings.jwt_remember_ttl_minutes,
        )

    def issue(self, admin: Admins, remember: bool = False) -> IssuedToken:
        now = datetime.now(UTC)
        ttl = self.remember_ttl_minutes if remember else self.ttl_minutes
        expires_at = now + timedelta(minutes=ttl)
        jti = uuid.uuid4().hex

        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "sub": str(admin.id),
            "jti": jti,
            "email": admin.email,
            "iat": now,
            "nbf": now,
            "exp": expires_at,
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return IssuedToken(token=token, jti=jti, expires_at=expires_at, ttl_minutes=ttl)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={
                    "verify_exp": True,
                    "verify_nbf": True,
                    "verify_iat": True,
                    "require": ["sub", "jti", "exp"],
                },
            )
        except InvalidTokenError as e:
            logger.warning("JWT token validation failed", error=str(e))
            raise TokenError("Invalid token") from e

        return payload
