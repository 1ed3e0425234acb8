"""
Request-scoped wiring for GraphQL resolvers
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import strawberry
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import AdminGuard, AuthGateway, TokenIssuer
from ..config import settings
from ..database.connection import get_async_session
from ..events import EventDispatcher, build_dispatcher
from ..logging import get_logger
from ..repositories import (
    AdminRepository,
    CatalogRuleRepository,
    RevokedTokenRepository,
    RoleRepository,
    TransactionRepository,
)
from ..services.admin_users import AdminUserService
from ..storage import ImageStore, get_image_store

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_event_dispatcher() -> EventDispatcher:
    return build_dispatcher(settings.redis_url, settings.events_channel)


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer.from_settings(settings)


def build_context(request: Any) -> dict[str, Any]:
    """Context dict handed to every resolver."""
    return {
        "request": request,
        "events": get_event_dispatcher(),
        "images": get_image_store(),
        "tokens": get_token_issuer(),
    }


@dataclass
class RequestServices:
    session: AsyncSession
    guard: AdminGuard
    auth: AuthGateway
    users: AdminUserService
    roles: RoleRepository
    images: ImageStore
    catalog_rules: CatalogRuleRepository
    transactions: TransactionRepository


def get_authorization(info: strawberry.Info) -> str | None:
    request = info.context.get("request")
    if request is None:
        logger.error("Request not found in GraphQL context")
        return None
    return request.headers.get("authorization")


@asynccontextmanager
async def open_services(
    info: strawberry.Info, require_auth: bool = True
) -> AsyncIterator[RequestServices]:
    """Open a session and build the services for one resolver call.

    The bearer token from the request is resolved first; with
    ``require_auth`` an unauthenticated request raises ``AuthError``.
    Image files are only removed after the session outcome is known:
    replaced or orphaned files once it commits, new uploads if it rolls back.
    """
    events: EventDispatcher = info.context.get("events") or get_event_dispatcher()
    images: ImageStore = info.context.get("images") or get_image_store()
    tokens: TokenIssuer = info.context.get("tokens") or get_token_issuer()

    services: RequestServices | None = None
    try:
        async with get_async_session() as session:
            admins = AdminRepository(session)
            roles = RoleRepository(session)
            guard = AdminGuard(admins, RevokedTokenRepository(session), tokens)

            await guard.authenticate(get_authorization(info))
            if require_auth:
                guard.require()

            services = RequestServices(
                session=session,
                guard=guard,
                auth=AuthGateway(guard),
                users=AdminUserService(admins, roles, events, images),
                roles=roles,
                images=images,
                catalog_rules=CatalogRuleRepository(session),
                transactions=TransactionRepository(session),
            )
            yield services
    except Exception:
        if services is not None:
            await services.users.discard_new_images()
        raise

    if services is not None:
        await services.users.release_stale_images()


def input_to_dict(input: Any) -> dict[str, Any]:
    """Fields of a Strawberry input that were actually provided."""
    if input is None:
        return {}
    return {
        key: value
        for key, value in vars(input).items()
        if value is not None and value is not strawberry.UNSET
    }
