"""
Promotion and sales GraphQL type definitions
"""

from datetime import date, datetime
from decimal import Decimal

import strawberry


@strawberry.type
class CatalogRule:
    """Catalog price rule (promotion)."""

    id: int
    name: str
    description: str | None
    starts_from: date | None
    ends_till: date | None
    status: bool
    condition_type: int
    conditions: strawberry.scalars.JSON | None  # type: ignore[reportInvalidTypeForm]
    end_other_rules: bool
    action_type: str | None
    discount_amount: Decimal
    sort_order: int
    created_at: datetime | None
    updated_at: datetime | None


@strawberry.type
class Transaction:
    """Payment transaction recorded against an order."""

    id: int
    transaction_id: str
    status: str | None
    type: str | None
    payment_method: str | None
    amount: Decimal | None
    data: strawberry.scalars.JSON | None  # type: ignore[reportInvalidTypeForm]
    invoice_id: int | None
    order_id: int
    created_at: datetime | None
    updated_at: datetime | None
