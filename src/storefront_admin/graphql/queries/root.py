"""
Root GraphQL query definitions
"""

from datetime import date

import strawberry

from ..types.sales import CatalogRule, Transaction
from ..types.user import AdminUser, Role

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def page_window(limit: int | None, offset: int | None) -> tuple[int, int]:
    """Clamp listing arguments to ``0..MAX_PAGE_SIZE`` rows from a non-negative offset."""
    limit = DEFAULT_PAGE_SIZE if limit is None else min(max(limit, 0), MAX_PAGE_SIZE)
    offset = 0 if offset is None else max(offset, 0)
    return limit, offset


# Filter inputs expose the storefront-facing argument names
@strawberry.input
class FilterAdminUserInput:
    id: int | None = None
    name: str | None = None
    email: str | None = None
    status: bool | None = None
    role_id: int | None = None


@strawberry.input
class FilterCatalogRuleInput:
    id: int | None = None
    name: str | None = None
    start: date | None = None
    end: date | None = None
    status: bool | None = None
    priority: int | None = None
    condition_type: int | None = None
    end_other_rules: bool | None = None
    action_type: str | None = None


@strawberry.input
class FilterTransactionInput:
    id: int | None = None
    transaction_id: str | None = None
    status: str | None = None
    type: str | None = None
    payment_method: str | None = None
    invoice_id: int | None = None
    order_id: int | None = None


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> AdminUser | None:
        """Get the currently authenticated admin."""
        from ..resolvers.auth import resolve_current_admin

        return await resolve_current_admin(info)

    @strawberry.field
    async def admin_user(self, info: strawberry.Info, id: int) -> AdminUser | None:
        """Get an admin user by ID."""
        from ..resolvers.user import resolve_admin_user

        return await resolve_admin_user(info, id)

    @strawberry.field
    async def admin_users(
        self,
        info: strawberry.Info,
        filter: FilterAdminUserInput | None = None,
        limit: int | None = DEFAULT_PAGE_SIZE,
        offset: int | None = 0,
    ) -> list[AdminUser]:
        """List admin users matching every given filter field."""
        from ..resolvers.user import resolve_admin_users

        return await resolve_admin_users(info, filter, *page_window(limit, offset))

    @strawberry.field
    async def roles(self, info: strawberry.Info) -> list[Role]:
        """List roles available for admin users."""
        from ..resolvers.user import resolve_roles

        return await resolve_roles(info)

    @strawberry.field
    async def catalog_rules(
        self,
        info: strawberry.Info,
        filter: FilterCatalogRuleInput | None = None,
        limit: int | None = DEFAULT_PAGE_SIZE,
        offset: int | None = 0,
    ) -> list[CatalogRule]:
        """List catalog rules (promotions)."""
        from ..resolvers.sales import resolve_catalog_rules

        return await resolve_catalog_rules(info, filter, *page_window(limit, offset))

    @strawberry.field
    async def transactions(
        self,
        info: strawberry.Info,
        filter: FilterTransactionInput | None = None,
        limit: int | None = DEFAULT_PAGE_SIZE,
        offset: int | None = 0,
    ) -> list[Transaction]:
        """List payment transactions."""
        from ..resolvers.sales import resolve_transactions

        return await resolve_transactions(info, filter, *page_window(limit, offset))
