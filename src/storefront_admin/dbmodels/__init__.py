"""
Database models for the storefront admin API (authoritative ORM definitions).

This module defines the SQLAlchemy Base with a naming convention for stable
Alembic autogenerate diffs, and exposes `target_metadata` for Alembic.
Column types are kept portable so the same models run on PostgreSQL and on
the in-memory SQLite database used by the test-suite.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names in Alembic diffs
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class Roles(TimestampMixin, Base):
    __tablename__ = "roles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    permission_type: Mapped[str] = mapped_column(String(20), nullable=False, default="custom")
    permissions: Mapped[list[str] | None] = mapped_column(JSON)

    admins: Mapped[list["Admins"]] = relationship("Admins", uselist=True, back_populates="role")


class Admins(TimestampMixin, Base):
    __tablename__ = "admins"
    __table_args__ = (
        UniqueConstraint("email", name="admins_email_unique"),
        UniqueConstraint("api_token", name="admins_api_token_unique"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str | None] = mapped_column(String(255))
    api_token: Mapped[str | None] = mapped_column(String(80))
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    role_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )
    image: Mapped[str | None] = mapped_column(String(512))

    role: Mapped["Roles"] = relationship("Roles", back_populates="admins")


class RevokedTokens(Base):
    """JWT ids invalidated by logout; ``expires_at`` mirrors the token exp for pruning."""

    __tablename__ = "revoked_tokens"
    __table_args__ = (UniqueConstraint("jti", name="revoked_tokens_jti_unique"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    jti: Mapped[str] = mapped_column(String(64), nullable=False)
    admin_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("admins.id", ondelete="CASCADE")
    )
    revoked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class CatalogRules(TimestampMixin, Base):
    __tablename__ = "catalog_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    starts_from: Mapped[date | None] = mapped_column(Date)
    ends_till: Mapped[date | None] = mapped_column(Date)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    condition_type: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    conditions: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON)
    end_other_rules: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    action_type: Mapped[str | None] = mapped_column(String(50))
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False, default=0)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class OrderTransactions(TimestampMixin, Base):
    __tablename__ = "order_transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    transaction_id: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str | None] = mapped_column(String(50))
    type: Mapped[str | None] = mapped_column(String(50))
    payment_method: Mapped[str | None] = mapped_column(String(100))
    amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 4), default=0)
    data: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    invoice_id: Mapped[int | None] = mapped_column(Integer)
    order_id: Mapped[int] = mapped_column(Integer, nullable=False)


target_metadata = Base.metadata

__all__ = [
    "Base",
    "Roles",
    "Admins",
    "RevokedTokens",
    "CatalogRules",
    "OrderTransactions",
    "target_metadata",
]
