"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.user import AdminUser, DeleteUserResponse, LoginResponse, LogoutResponse


# Input types for mutations
@strawberry.input
class LoginInput:
    """Credentials for an admin login."""

    email: str
    password: str
    remember: bool | None = False


@strawberry.input
class CreateUserInput:
    """Input for creating an admin user."""

    name: str
    email: str
    role_id: int
    password: str | None = None
    password_confirmation: str | None = None
    status: bool | None = None
    image: str | None = None


@strawberry.input
class UpdateUserInput:
    """Input for updating an admin user."""

    name: str
    email: str
    role_id: int
    password: str | None = None
    password_confirmation: str | None = None
    status: bool | None = None
    image: str | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Session mutations
    @strawberry.mutation(name="userLogin")
    async def user_login(self, info: strawberry.Info, input: LoginInput) -> LoginResponse:
        """Log an admin in and issue a bearer token."""
        from ..resolvers.auth import login

        return await login(info, input)

    @strawberry.mutation(name="userLogout")
    async def user_logout(self, info: strawberry.Info) -> LogoutResponse:
        """Invalidate the current admin session."""
        from ..resolvers.auth import logout

        return await logout(info)

    # Admin user mutations
    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, input: CreateUserInput) -> AdminUser:
        """Create an admin user."""
        from ..resolvers.user import create_user

        return await create_user(info, input)

    @strawberry.mutation(name="updateUser")
    async def update_user(
        self, info: strawberry.Info, id: int, input: UpdateUserInput
    ) -> AdminUser:
        """Update an admin user."""
        from ..resolvers.user import update_user

        return await update_user(info, id, input)

    @strawberry.mutation(name="deleteUser")
    async def delete_user(self, info: strawberry.Info, id: int) -> DeleteUserResponse:
        """Delete an admin user (the last remaining admin cannot be deleted)."""
        from ..resolvers.user import delete_user

        return await delete_user(info, id)
