from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...errors import AuthError
from ..context import open_services
from .user import to_admin_type

if TYPE_CHECKING:
    from ..mutations.root import LoginInput
    from ..types.user import AdminUser, LoginResponse, LogoutResponse


async def resolve_current_admin(info: strawberry.Info) -> AdminUser | None:
    async with open_services(info, require_auth=False) as services:
        if services.guard.admin is None:
            return None
        return await to_admin_type(services.guard.admin, services)


async def login(info: strawberry.Info, input: LoginInput) -> LoginResponse:
    from ..types.user import LoginResponse as LoginResponseType

    async with open_services(info, require_auth=False) as services:
        try:
            result = await services.auth.login(input.email, input.password, bool(input.remember))
        except AuthError:
            # Keep the revocation of a token issued to an inactive account
            await services.session.commit()
            raise

        return LoginResponseType(
            success=result.success,
            message=result.message,
            access_token=result.access_token,
            token_type=result.token_type,
            expires_in=result.expires_in,
            user=await to_admin_type(result.admin, services),
        )


async def logout(info: strawberry.Info) -> LogoutResponse:
    from ..types.user import LogoutResponse as LogoutResponseType

    async with open_services(info, require_auth=False) as services:
        result = await services.auth.logout()
        return LogoutResponseType(success=result.success, message=result.message)
