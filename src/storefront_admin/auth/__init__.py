"""Authentication for admin accounts."""

from .gateway import AuthGateway, LoginResult, LogoutResult
from .guard import AdminGuard
from .passwords import generate_api_token, hash_password, verify_password
from .tokens import IssuedToken, TokenError, TokenIssuer

__all__ = [
    "AdminGuard",
    "AuthGateway",
    "IssuedToken",
    "LoginResult",
    "LogoutResult",
    "TokenError",
    "TokenIssuer",
    "generate_api_token",
    "hash_password",
    "verify_password",
]
