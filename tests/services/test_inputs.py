"""Tests for admin input validation."""

import pytest

from storefront_admin.errors import ValidationError
from storefront_admin.services.inputs import AdminUpdateInput, normalize_email, validate_input


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("admin@EXAMPLE.com", "admin@example.com"),
        ("  admin@example.com ", "admin@example.com"),
        ("not-an-email", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_email(value, expected):
    assert normalize_email(value) == expected


def test_confirmation_alone_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_input(
            AdminUpdateInput,
            {"name": "A", "email": "a@example.com", "role_id": 1, "password_confirmation": "x"},
        )

    assert "confirmation" in exc_info.value.message


def test_matching_password_is_accepted():
    data = validate_input(
        AdminUpdateInput,
        {
            "name": "A",
            "email": "a@example.com",
            "role_id": 1,
            "password": "pw",
            "password_confirmation": "pw",
        },
    )

    assert data.password == "pw"
    assert data.password_confirmation == "pw"
