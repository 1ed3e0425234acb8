"""Per-request authentication state for admin accounts."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from ..dbmodels import Admins
from ..errors import AuthError
from ..i18n import trans
from ..logging import bind_admin_id, get_logger
from ..repositories import AdminRepository, RevokedTokenRepository
from .passwords import verify_password
from .tokens import IssuedToken, TokenError, TokenIssuer

logger = get_logger(__name__)


class AdminGuard:
    """Holds the authenticated admin and its token for one request.

    A guard starts unauthenticated. ``authenticate`` resolves an incoming
    bearer token; ``attempt`` checks credentials and issues a new token;
    ``logout`` revokes the current token and clears the state.
    """

    def __init__(
        self,
        admins: AdminRepository,
        revoked_tokens: RevokedTokenRepository,
        tokens: TokenIssuer,
    ):
        self.admins = admins
        self.revoked_tokens = revoked_tokens
        self.tokens = tokens
        self.admin: Admins | None = None
        self.token: str | None = None
        self.claims: dict[str, Any] | None = None

    @property
    def check(self) -> bool:
        return self.admin is not None

    def require(self) -> Admins:
        """Return the authenticated admin or raise ``AuthError``."""
        if self.admin is None:
            raise AuthError(trans("admin.response.error.unauthenticated"))
        return self.admin

    async def attempt(self, email: str, password: str, remember: bool = False) -> IssuedToken | None:
        """Verify credentials and log the admin in. Returns None on mismatch."""
        admin = await self.admins.find_by_email(email)
        if admin is None:
            verify_password(password, None)
            return None

        if not verify_password(password, admin.password):
            logger.info("Login attempt with invalid password", admin_id=admin.id)
            return None

        issued = self.tokens.issue(admin, remember=remember)
        self._login(
            admin,
            issued.token,
            {"sub": str(admin.id), "jti": issued.jti, "exp": issued.expires_at},
        )
        return issued

    async def authenticate(self, authorization: str | None) -> Admins | None:
        """Resolve an ``Authorization: Bearer`` header into an admin.

        Invalid, revoked or inactive-account tokens leave the guard
        unauthenticated.
        """
        if not authorization or not authorization.startswith("Bearer "):
            return None

        token = authorization[7:].strip()
        if not token:
            return None

        try:
            claims = self.tokens.decode(token)
        except TokenError:
            return None

        if await self.revoked_tokens.is_revoked(claims["jti"]):
            logger.info("Revoked token presented", jti=claims["jti"])
            return None

        try:
            admin_id = int(claims["sub"])
        except (TypeError, ValueError):
            logger.warning("Token subject is not an admin id", subject=claims.get("sub"))
            return None

        admin = await self.admins.find(admin_id)
        if admin is None or not admin.status:
            return None

        self._login(admin, token, claims)
        return admin

    async def logout(self) -> None:
        """Revoke the current token (if any) and clear the guard. Safe to repeat."""
        if self.claims and self.claims.get("jti"):
            await self.revoked_tokens.revoke(
                self.claims["jti"],
                expires_at=_as_datetime(self.claims.get("exp")),
                admin_id=self.admin.id if self.admin else None,
            )
            logger.info("Admin token revoked", jti=self.claims["jti"])

        self.admin = None
        self.token = None
        self.claims = None
        bind_admin_id(None)

    def _login(self, admin: Admins, token: str, claims: dict[str, Any]) -> None:
        self.admin = admin
        self.token = token
        self.claims = claims
        bind_admin_id(admin.id)


def _as_datetime(exp: Any) -> datetime:
    if isinstance(exp, datetime):
        return exp
    if isinstance(exp, int | float):
        return datetime.fromtimestamp(exp, UTC)
    return datetime.now(UTC)
