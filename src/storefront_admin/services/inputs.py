"""Input schemas and validation for admin operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
    validate_email,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from ..errors import ValidationError
from ..i18n import trans

ModelT = TypeVar("ModelT", bound=BaseModel)


class LoginInput(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    remember: bool = False


class _AdminInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str | None = None
    password_confirmation: str | None = None
    role_id: int
    status: bool | None = None
    image: str | None = None

    @field_validator("password", "password_confirmation", "image", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        return None if value == "" else value

    @model_validator(mode="after")
    def _confirm_password(self) -> _AdminInput:
        has_password = self.password is not None or self.password_confirmation is not None
        if has_password and self.password_confirmation != self.password:
            raise ValueError(trans("admin.settings.users.password-mismatch"))
        return self


class AdminCreateInput(_AdminInput):
    password: str | None = Field(default=None, min_length=6)


class AdminUpdateInput(_AdminInput):
    pass


def normalize_email(value: Any) -> str | None:
    """Email in the form ``EmailStr`` stores it, or None when it is not a valid address."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return validate_email(value.strip())[1]
    except PydanticCustomError:
        return None


def format_errors(error: PydanticValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err["loc"])
        msg = err["msg"].removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


def validate_input(
    model: type[ModelT], data: Mapping[str, Any], extra_errors: list[str] | None = None
) -> ModelT:
    """Validate ``data`` against ``model``, raising one ``ValidationError`` for all problems."""
    errors = list(extra_errors or [])
    parsed: ModelT | None = None
    try:
        parsed = model.model_validate(dict(data))
    except PydanticValidationError as e:
        errors.extend(format_errors(e))

    if errors or parsed is None:
        raise ValidationError("; ".join(errors))
    return parsed
