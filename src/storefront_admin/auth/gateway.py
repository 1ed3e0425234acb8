"""Login and logout for admin accounts."""

from __future__ import annotations

from dataclasses import dataclass

from ..dbmodels import Admins
from ..errors import AuthError, wrap_errors
from ..i18n import trans
from ..logging import get_logger
from ..services.inputs import LoginInput, validate_input
from .guard import AdminGuard

logger = get_logger(__name__)


@dataclass
class LoginResult:
    success: bool
    message: str
    access_token: str
    token_type: str
    expires_in: int
    admin: Admins


@dataclass
class LogoutResult:
    success: bool
    message: str


class AuthGateway:
    def __init__(self, guard: AdminGuard):
        self.guard = guard

    async def login(self, email: str, password: str, remember: bool = False) -> LoginResult:
        """Authenticate by email and password and issue a bearer token.

        Raises ``AuthError`` when the credentials do not match or when they
        match an inactive account; in the latter case the issued token is
        revoked before the error is raised.
        """
        credentials = validate_input(
            LoginInput, {"email": email, "password": password, "remember": remember}
        )

        issued = await self.guard.attempt(
            credentials.email, credentials.password, remember=credentials.remember
        )
        if issued is None:
            raise AuthError(trans("admin.settings.users.login-error"))

        with wrap_errors():
            admin = self.guard.require()

            if not admin.status:
                await self.guard.logout()
                logger.info("Login rejected for inactive admin", admin_id=admin.id)
                raise AuthError(trans("admin.settings.users.activate-warning"))

            logger.info("Admin logged in", admin_id=admin.id, remember=credentials.remember)
            return LoginResult(
                success=True,
                message=trans("admin.settings.users.success-login"),
                access_token=f"Bearer {issued.token}",
                token_type="Bearer",
                expires_in=issued.expires_in,
                admin=admin,
            )

    async def logout(self) -> LogoutResult:
        await self.guard.logout()
        return LogoutResult(success=True, message=trans("admin.settings.users.success-logout"))
