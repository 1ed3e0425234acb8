"""
Admin user and role GraphQL type definitions
"""

from datetime import datetime

import strawberry


@strawberry.type
class Role:
    """Role type for GraphQL API."""

    id: int
    name: str
    description: str | None
    permission_type: str
    permissions: list[str] | None


@strawberry.type
class AdminUser:
    """Admin user type for GraphQL API."""

    id: int
    name: str
    email: str
    status: bool
    role_id: int
    role: Role | None
    image: str | None
    image_url: str | None
    created_at: datetime | None
    updated_at: datetime | None
    success: str | None = None


@strawberry.type
class LoginResponse:
    success: bool
    message: str
    access_token: str
    token_type: str
    expires_in: int
    user: AdminUser


@strawberry.type
class LogoutResponse:
    success: bool
    message: str


@strawberry.type
class DeleteUserResponse:
    success: str
