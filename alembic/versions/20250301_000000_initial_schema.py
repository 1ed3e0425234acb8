"""
Initial schema: roles, admins, revoked tokens, catalog rules, order transactions.

Revision ID: 20250301_000000_initial_schema
Revises:
Create Date: 2025-03-01 00:00:00
"""

import sqlalchemy as sa

from alembic import op  # type: ignore[reportMissingImports]

# revision identifiers, used by Alembic.
revision = "20250301_000000_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("permission_type", sa.String(length=20), nullable=False),
        sa.Column("permissions", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_roles"),
    )

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=True),
        sa.Column("api_token", sa.String(length=80), nullable=True),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("image", sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["role_id"], ["roles.id"], name="fk_admins_role_id_roles", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_admins"),
        sa.UniqueConstraint("email", name="admins_email_unique"),
        sa.UniqueConstraint("api_token", name="admins_api_token_unique"),
    )

    op.create_table(
        "revoked_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("jti", sa.String(length=64), nullable=False),
        sa.Column("admin_id", sa.Integer(), nullable=True),
        sa.Column("revoked_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["admin_id"], ["admins.id"], name="fk_revoked_tokens_admin_id_admins", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id", name="pk_revoked_tokens"),
        sa.UniqueConstraint("jti", name="revoked_tokens_jti_unique"),
    )

    op.create_table(
        "catalog_rules",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("starts_from", sa.Date(), nullable=True),
        sa.Column("ends_till", sa.Date(), nullable=True),
        sa.Column("status", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("condition_type", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("conditions", sa.JSON(), nullable=True),
        sa.Column("end_other_rules", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("action_type", sa.String(length=50), nullable=True),
        sa.Column("discount_amount", sa.Numeric(12, 4), nullable=False, server_default="0"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_catalog_rules"),
    )

    op.create_table(
        "order_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("transaction_id", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("payment_method", sa.String(length=100), nullable=True),
        sa.Column("amount", sa.Numeric(12, 4), nullable=True, server_default="0"),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("invoice_id", sa.Integer(), nullable=True),
        sa.Column("order_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_order_transactions"),
    )
    op.create_index(
        "ix_order_transactions_order_id", "order_transactions", ["order_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_order_transactions_order_id", table_name="order_transactions")
    op.drop_table("order_transactions")
    op.drop_table("catalog_rules")
    op.drop_table("revoked_tokens")
    op.drop_table("admins")
    op.drop_table("roles")
