from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...dbmodels import Admins
from ...logging import get_logger
from ..context import RequestServices, input_to_dict, open_services

if TYPE_CHECKING:
    from ..mutations.root import CreateUserInput, UpdateUserInput
    from ..queries.root import FilterAdminUserInput
    from ..types.user import AdminUser, DeleteUserResponse, Role

logger = get_logger(__name__)


async def to_admin_type(
    admin: Admins, services: RequestServices, success: str | None = None
) -> AdminUser:
    """Convert an admin row to its GraphQL type, resolving its role."""
    from ..types.user import AdminUser as AdminUserType

    role = await services.roles.find(admin.role_id)

    return AdminUserType(
        id=admin.id,
        name=admin.name,
        email=admin.email,
        status=bool(admin.status),
        role_id=admin.role_id,
        role=to_role_type(role) if role else None,
        image=admin.image,
        image_url=services.images.url_for(admin.image),
        created_at=admin.created_at,
        updated_at=admin.updated_at,
        success=success,
    )


def to_role_type(role) -> Role:
    from ..types.user import Role as RoleType

    return RoleType(
        id=role.id,
        name=role.name,
        description=role.description,
        permission_type=role.permission_type,
        permissions=role.permissions,
    )


# Query resolvers
async def resolve_admin_user(info: strawberry.Info, id: int) -> AdminUser | None:
    async with open_services(info) as services:
        admin = await services.users.find(id)
        if admin is None:
            logger.info("Admin not found", admin_id=id)
            return None
        return await to_admin_type(admin, services)


async def resolve_admin_users(
    info: strawberry.Info,
    filter: FilterAdminUserInput | None,
    limit: int,
    offset: int,
) -> list[AdminUser]:
    async with open_services(info) as services:
        admins = await services.users.list(input_to_dict(filter), limit=limit, offset=offset)
        return [await to_admin_type(admin, services) for admin in admins]


async def resolve_roles(info: strawberry.Info) -> list[Role]:
    async with open_services(info) as services:
        roles = await services.roles.fetch(services.roles.query())
        return [to_role_type(role) for role in roles]


# Mutation resolvers
async def create_user(info: strawberry.Info, input: CreateUserInput) -> AdminUser:
    async with open_services(info) as services:
        result = await services.users.create(input_to_dict(input))
        return await to_admin_type(result.admin, services, success=result.success)


async def update_user(info: strawberry.Info, id: int, input: UpdateUserInput) -> AdminUser:
    async with open_services(info) as services:
        result = await services.users.update(id, input_to_dict(input))
        return await to_admin_type(result.admin, services, success=result.success)


async def delete_user(info: strawberry.Info, id: int) -> DeleteUserResponse:
    from ..types.user import DeleteUserResponse as DeleteUserResponseType

    async with open_services(info) as services:
        result = await services.users.delete(id)
        return DeleteUserResponseType(success=result.success)
