"""
Integration tests for the admin GraphQL schema against a SQLite database.
"""

import base64
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from storefront_admin.auth.passwords import hash_password
from storefront_admin.dbmodels import Admins, CatalogRules, OrderTransactions, RevokedTokens, Roles
from storefront_admin.events import ADMIN_CREATE_AFTER, ADMIN_DELETE_AFTER
from storefront_admin.graphql.schema import schema

PASSWORD = "secret123"

LOGIN_MUTATION = """
mutation Login($input: LoginInput!) {
  userLogin(input: $input) {
    success
    message
    accessToken
    tokenType
    expiresIn
    user { id email status role { name } }
  }
}
"""

CREATE_USER_MUTATION = """
mutation CreateUser($input: CreateUserInput!) {
  createUser(input: $input) { id name email status roleId success }
}
"""

UPDATE_USER_MUTATION = """
mutation UpdateUser($id: Int!, $input: UpdateUserInput!) {
  updateUser(id: $id, input: $input) { id name status success }
}
"""

DELETE_USER_MUTATION = """
mutation DeleteUser($id: Int!) {
  deleteUser(id: $id) { success }
}
"""


@pytest_asyncio.fixture
async def seeded(reset_shared_db_connections: None) -> dict[str, int]:
    """Commit a role, an active and an inactive admin, promotions and transactions."""
    _ = reset_shared_db_connections

    from storefront_admin.database.connection import get_async_session

    async with get_async_session() as session:
        role = Roles(name="Administrator", permission_type="all", permissions=[])
        session.add(role)
        await session.flush()

        active = Admins(
            name="Active Admin",
            email="admin@example.com",
            password=hash_password(PASSWORD),
            status=True,
            role_id=role.id,
        )
        inactive = Admins(
            name="Inactive Admin",
            email="inactive@example.com",
            password=hash_password(PASSWORD),
            status=False,
            role_id=role.id,
        )
        session.add_all([active, inactive])

        session.add_all(
            [
                CatalogRules(
                    name="New Year",
                    starts_from=date(2024, 1, 1),
                    ends_till=date(2024, 1, 31),
                    status=True,
                    discount_amount=Decimal("10"),
                    sort_order=2,
                ),
                CatalogRules(
                    name="Summer",
                    starts_from=date(2024, 6, 1),
                    ends_till=date(2024, 8, 31),
                    status=True,
                    discount_amount=Decimal("15"),
                    sort_order=1,
                ),
                OrderTransactions(
                    transaction_id="txn-1", status="paid", payment_method="cashondelivery", order_id=5
                ),
                OrderTransactions(
                    transaction_id="txn-2", status="pending", payment_method="paypal", order_id=5
                ),
                OrderTransactions(
                    transaction_id="txn-3", status="paid", payment_method="paypal", order_id=6
                ),
            ]
        )
        await session.flush()

        return {"role_id": role.id, "active_id": active.id, "inactive_id": inactive.id}


def make_context(image_store, token_issuer, events, token: str | None = None) -> dict[str, Any]:
    headers = {"authorization": f"Bearer {token}"} if token else {}
    return {
        "request": SimpleNamespace(headers=headers),
        "events": events,
        "images": image_store,
        "tokens": token_issuer,
    }


async def count_rows(model) -> int:
    from storefront_admin.database.connection import get_async_session

    async with get_async_session() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return int(result.scalar_one())


@pytest.fixture
def anonymous(image_store, token_issuer, events) -> dict[str, Any]:
    return make_context(image_store, token_issuer, events)


@pytest.fixture
def authenticated(seeded, image_store, token_issuer, events) -> dict[str, Any]:
    token = token_issuer.issue(SimpleNamespace(id=seeded["active_id"], email="admin@example.com"))
    return make_context(image_store, token_issuer, events, token.token)


def error_category(result) -> str:
    assert result.errors, "expected an error"
    return result.errors[0].extensions["category"]


@pytest.mark.requires_db
@pytest.mark.integration
class TestLogin:
    @pytest.mark.asyncio
    async def test_login_success(self, seeded, anonymous):
        result = await schema.execute(
            LOGIN_MUTATION,
            variable_values={"input": {"email": "admin@example.com", "password": PASSWORD}},
            context_value=anonymous,
        )

        assert result.errors is None
        data = result.data["userLogin"]
        assert data["success"] is True
        assert data["accessToken"].startswith("Bearer ")
        assert data["tokenType"] == "Bearer"
        assert data["expiresIn"] > 0
        assert data["user"]["email"] == "admin@example.com"
        assert data["user"]["role"]["name"] == "Administrator"

    @pytest.mark.asyncio
    async def test_login_bad_password(self, seeded, anonymous):
        result = await schema.execute(
            LOGIN_MUTATION,
            variable_values={"input": {"email": "admin@example.com", "password": "wrong-pass"}},
            context_value=anonymous,
        )

        assert result.data is None
        assert error_category(result) == "authentication"

    @pytest.mark.asyncio
    async def test_login_inactive_revokes_token(self, seeded, anonymous):
        result = await schema.execute(
            LOGIN_MUTATION,
            variable_values={"input": {"email": "inactive@example.com", "password": PASSWORD}},
            context_value=anonymous,
        )

        assert error_category(result) == "authentication"
        assert "activated" in result.errors[0].message
        assert await count_rows(RevokedTokens) == 1

    @pytest.mark.asyncio
    async def test_login_malformed_input(self, seeded, anonymous):
        result = await schema.execute(
            LOGIN_MUTATION,
            variable_values={"input": {"email": "not-an-email", "password": PASSWORD}},
            context_value=anonymous,
        )

        assert error_category(result) == "validation"

    @pytest.mark.asyncio
    async def test_logout_then_token_is_rejected(self, seeded, anonymous, image_store, token_issuer, events):
        login = await schema.execute(
            LOGIN_MUTATION,
            variable_values={"input": {"email": "admin@example.com", "password": PASSWORD}},
            context_value=anonymous,
        )
        token = login.data["userLogin"]["accessToken"].removeprefix("Bearer ")
        context = make_context(image_store, token_issuer, events, token)

        logout = await schema.execute("mutation { userLogout { success message } }", context_value=context)
        assert logout.errors is None
        assert logout.data["userLogout"]["success"] is True

        me = await schema.execute("{ me { id } }", context_value=context)
        assert me.errors is None
        assert me.data["me"] is None

        again = await schema.execute("mutation { userLogout { success } }", context_value=context)
        assert again.data["userLogout"]["success"] is True


@pytest.mark.requires_db
@pytest.mark.integration
class TestAdminUsers:
    @pytest.mark.asyncio
    async def test_me(self, seeded, authenticated):
        result = await schema.execute("{ me { id email } }", context_value=authenticated)

        assert result.errors is None
        assert result.data["me"] == {"id": seeded["active_id"], "email": "admin@example.com"}

    @pytest.mark.asyncio
    async def test_requires_authentication(self, seeded, anonymous):
        result = await schema.execute(
            CREATE_USER_MUTATION,
            variable_values={
                "input": {"name": "New", "email": "new@example.com", "roleId": seeded["role_id"]}
            },
            context_value=anonymous,
        )

        assert error_category(result) == "authentication"
        assert await count_rows(Admins) == 2

    @pytest.mark.asyncio
    async def test_create_user(self, seeded, authenticated, image_store):
        result = await schema.execute(
            CREATE_USER_MUTATION,
            variable_values={
                "input": {
                    "name": "New Admin",
                    "email": "new@example.com",
                    "password": "password1",
                    "passwordConfirmation": "password1",
                    "roleId": seeded["role_id"],
                    "status": True,
                    "image": "",
                }
            },
            context_value=authenticated,
        )

        assert result.errors is None
        data = result.data["createUser"]
        assert data["email"] == "new@example.com"
        assert data["status"] is True
        assert data["success"] == "User created successfully."
        image_store.upload_image.assert_not_awaited()
        assert await count_rows(Admins) == 3

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, seeded, authenticated):
        result = await schema.execute(
            CREATE_USER_MUTATION,
            variable_values={
                "input": {"name": "Dup", "email": "admin@example.com", "roleId": seeded["role_id"]}
            },
            context_value=authenticated,
        )

        assert error_category(result) == "validation"
        assert await count_rows(Admins) == 2

    @pytest.mark.asyncio
    async def test_update_unknown_role(self, seeded, authenticated):
        result = await schema.execute(
            UPDATE_USER_MUTATION,
            variable_values={
                "id": seeded["inactive_id"],
                "input": {"name": "Changed", "email": "inactive@example.com", "roleId": 999},
            },
            context_value=authenticated,
        )

        assert error_category(result) == "not_found"

    @pytest.mark.asyncio
    async def test_update_user(self, seeded, authenticated):
        result = await schema.execute(
            UPDATE_USER_MUTATION,
            variable_values={
                "id": seeded["inactive_id"],
                "input": {
                    "name": "Now Active",
                    "email": "inactive@example.com",
                    "roleId": seeded["role_id"],
                    "status": True,
                },
            },
            context_value=authenticated,
        )

        assert result.errors is None
        assert result.data["updateUser"]["name"] == "Now Active"
        assert result.data["updateUser"]["status"] is True

    @pytest.mark.asyncio
    async def test_delete_user(self, seeded, authenticated):
        result = await schema.execute(
            DELETE_USER_MUTATION,
            variable_values={"id": seeded["inactive_id"]},
            context_value=authenticated,
        )

        assert result.errors is None
        assert result.data["deleteUser"]["success"] == "User deleted successfully."
        assert await count_rows(Admins) == 1

        last = await schema.execute(
            DELETE_USER_MUTATION,
            variable_values={"id": seeded["active_id"]},
            context_value=authenticated,
        )

        assert error_category(last) == "invariant"
        assert await count_rows(Admins) == 1

    @pytest.mark.asyncio
    async def test_admin_users_filter(self, seeded, authenticated):
        result = await schema.execute(
            "{ adminUsers(filter: {status: false}) { email } }", context_value=authenticated
        )

        assert result.errors is None
        assert result.data["adminUsers"] == [{"email": "inactive@example.com"}]

    @pytest.mark.asyncio
    async def test_admin_user_not_found(self, seeded, authenticated):
        result = await schema.execute("{ adminUser(id: 999) { id } }", context_value=authenticated)

        assert result.errors is None
        assert result.data["adminUser"] is None

    @pytest.mark.asyncio
    async def test_roles(self, seeded, authenticated):
        result = await schema.execute("{ roles { name permissionType } }", context_value=authenticated)

        assert result.errors is None
        assert result.data["roles"] == [{"name": "Administrator", "permissionType": "all"}]


@pytest.mark.requires_db
@pytest.mark.integration
class TestSalesQueries:
    @pytest.mark.asyncio
    async def test_catalog_rules_filter_by_start(self, seeded, authenticated):
        result = await schema.execute(
            '{ catalogRules(filter: {start: "2024-01-01"}) { name startsFrom sortOrder } }',
            context_value=authenticated,
        )

        assert result.errors is None
        assert result.data["catalogRules"] == [
            {"name": "New Year", "startsFrom": "2024-01-01", "sortOrder": 2}
        ]

    @pytest.mark.asyncio
    async def test_catalog_rules_filter_by_priority(self, seeded, authenticated):
        result = await schema.execute(
            "{ catalogRules(filter: {priority: 1}) { name } }", context_value=authenticated
        )

        assert result.errors is None
        assert result.data["catalogRules"] == [{"name": "Summer"}]

    @pytest.mark.asyncio
    async def test_catalog_rules_full_filter(self, seeded, authenticated):
        result = await schema.execute(
            "{ catalogRules(filter: {start: \"2024-01-01\", end: \"2024-01-31\", priority: 2, "
            "status: true}) { name } }",
            context_value=authenticated,
        )

        assert result.errors is None
        assert result.data["catalogRules"] == [{"name": "New Year"}]

    @pytest.mark.asyncio
    async def test_catalog_rules_without_filter(self, seeded, authenticated):
        result = await schema.execute("{ catalogRules { name } }", context_value=authenticated)

        assert [rule["name"] for rule in result.data["catalogRules"]] == ["New Year", "Summer"]

    @pytest.mark.asyncio
    async def test_catalog_rules_zero_limit(self, seeded, authenticated):
        result = await schema.execute("{ catalogRules(limit: 0) { name } }", context_value=authenticated)

        assert result.errors is None
        assert result.data["catalogRules"] == []

    @pytest.mark.asyncio
    async def test_transactions_filter(self, seeded, authenticated):
        result = await schema.execute(
            '{ transactions(filter: {orderId: 5, status: "paid"}) { transactionId } }',
            context_value=authenticated,
        )

        assert result.errors is None
        assert result.data["transactions"] == [{"transactionId": "txn-1"}]

    @pytest.mark.asyncio
    async def test_transactions_require_authentication(self, seeded, anonymous):
        result = await schema.execute("{ transactions { id } }", context_value=anonymous)

        assert error_category(result) == "authentication"


@pytest.mark.requires_db
@pytest.mark.integration
class TestImageFiles:
    @pytest.fixture
    def store(self, tmp_path):
        from storefront_admin.storage import ImageStore, LocalStorageProvider

        return ImageStore(LocalStorageProvider(tmp_path / "storage"))

    @pytest.fixture
    def context(self, seeded, store, token_issuer, events) -> dict[str, Any]:
        token = token_issuer.issue(SimpleNamespace(id=seeded["active_id"], email="admin@example.com"))
        return make_context(store, token_issuer, events, token.token)

    async def create_with_image(self, seeded, context) -> dict[str, Any]:
        data_uri = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\navatar").decode()
        result = await schema.execute(
            "mutation C($input: CreateUserInput!) { createUser(input: $input) { id image } }",
            variable_values={
                "input": {
                    "name": "Pictured",
                    "email": "pictured@example.com",
                    "roleId": seeded["role_id"],
                    "image": data_uri,
                }
            },
            context_value=context,
        )
        assert result.errors is None
        return result.data["createUser"]

    @pytest.mark.asyncio
    async def test_rolled_back_delete_keeps_file(self, seeded, context, store, events):
        created = await self.create_with_image(seeded, context)
        assert await store.provider.exists(created["image"]) is True

        def failing(event):
            raise RuntimeError("listener failed")

        events.subscribe(ADMIN_DELETE_AFTER, failing)

        result = await schema.execute(
            DELETE_USER_MUTATION, variable_values={"id": created["id"]}, context_value=context
        )

        assert error_category(result) == "internal"
        assert await count_rows(Admins) == 3
        assert await store.provider.exists(created["image"]) is True

    @pytest.mark.asyncio
    async def test_committed_delete_removes_file(self, seeded, context, store):
        created = await self.create_with_image(seeded, context)

        result = await schema.execute(
            DELETE_USER_MUTATION, variable_values={"id": created["id"]}, context_value=context
        )

        assert result.errors is None
        assert await store.provider.exists(created["image"]) is False

    @pytest.mark.asyncio
    async def test_rolled_back_create_removes_upload(self, seeded, context, store, events, tmp_path):
        def failing(event):
            raise RuntimeError("listener failed")

        events.subscribe(ADMIN_CREATE_AFTER, failing)
        data_uri = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\navatar").decode()

        result = await schema.execute(
            CREATE_USER_MUTATION,
            variable_values={
                "input": {
                    "name": "Pictured",
                    "email": "pictured@example.com",
                    "roleId": seeded["role_id"],
                    "image": data_uri,
                }
            },
            context_value=context,
        )

        assert error_category(result) == "internal"
        assert await count_rows(Admins) == 2
        assert list((tmp_path / "storage").rglob("*.png")) == []
