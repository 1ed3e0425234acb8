"""Tests for request logging helpers."""

from storefront_admin.middleware import operation_name_from_query, sanitize_query_params


def test_sanitize_query_params_redacts_secrets():
    params = {"password": "hunter2", "access_token": "abc", "page": "2"}

    assert sanitize_query_params(params) == {
        "password": "[REDACTED]",
        "access_token": "[REDACTED]",
        "page": "2",
    }


def test_operation_name_for_named_query():
    assert operation_name_from_query("query AdminUsers { adminUsers { id } }") == "AdminUsers"


def test_operation_name_for_mutation():
    query = "mutation Login($input: LoginInput!) { userLogin(input: $input) { success } }"

    assert operation_name_from_query(query) == "mutation:Login"


def test_operation_name_for_anonymous_query():
    assert operation_name_from_query("{ me { id } }") == "unnamed_operation"


def test_operation_name_for_introspection():
    assert operation_name_from_query("query IntrospectionQuery { __schema { types { name } } }") == (
        "__introspection"
    )
