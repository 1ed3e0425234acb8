"""Tests for password hashing helpers."""

from storefront_admin.auth.passwords import generate_api_token, hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed) is True
    assert verify_password("wrong-password", hashed) is False


def test_verify_without_hash_fails():
    assert verify_password("secret123", None) is False
    assert verify_password("secret123", "") is False


def test_api_token_is_alphanumeric():
    token = generate_api_token()

    assert len(token) == 80
    assert token.isalnum()
    assert generate_api_token() != token
