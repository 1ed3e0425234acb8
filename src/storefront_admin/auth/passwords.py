"""Password hashing and API token generation."""

import secrets
import string

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

API_TOKEN_LENGTH = 80
_API_TOKEN_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed:
        # Keep timing comparable to a real verification
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(password, hashed)


def generate_api_token(length: int = API_TOKEN_LENGTH) -> str:
    """Random alphanumeric token stored alongside the admin record."""
    return "".join(secrets.choice(_API_TOKEN_ALPHABET) for _ in range(length))
