"""Resolvers for promotion and transaction listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...dbmodels import CatalogRules, OrderTransactions
from ...filters import filter_catalog_rules, filter_transactions
from ..context import input_to_dict, open_services

if TYPE_CHECKING:
    from ..queries.root import FilterCatalogRuleInput, FilterTransactionInput
    from ..types.sales import CatalogRule, Transaction


async def resolve_catalog_rules(
    info: strawberry.Info,
    filter: FilterCatalogRuleInput | None,
    limit: int,
    offset: int,
) -> list[CatalogRule]:
    async with open_services(info) as services:
        repo = services.catalog_rules
        stmt = filter_catalog_rules(repo.query(), input_to_dict(filter))
        rules = await repo.fetch(stmt, limit=limit, offset=offset)
        return [to_catalog_rule_type(rule) for rule in rules]


async def resolve_transactions(
    info: strawberry.Info,
    filter: FilterTransactionInput | None,
    limit: int,
    offset: int,
) -> list[Transaction]:
    async with open_services(info) as services:
        repo = services.transactions
        stmt = filter_transactions(repo.query(), input_to_dict(filter))
        transactions = await repo.fetch(stmt, limit=limit, offset=offset)
        return [to_transaction_type(transaction) for transaction in transactions]


def to_catalog_rule_type(rule: CatalogRules) -> CatalogRule:
    from ..types.sales import CatalogRule as CatalogRuleType

    return CatalogRuleType(
        id=rule.id,
        name=rule.name,
        description=rule.description,
        starts_from=rule.starts_from,
        ends_till=rule.ends_till,
        status=bool(rule.status),
        condition_type=rule.condition_type,
        conditions=rule.conditions,
        end_other_rules=bool(rule.end_other_rules),
        action_type=rule.action_type,
        discount_amount=rule.discount_amount,
        sort_order=rule.sort_order,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


def to_transaction_type(transaction: OrderTransactions) -> Transaction:
    from ..types.sales import Transaction as TransactionType

    return TransactionType(
        id=transaction.id,
        transaction_id=transaction.transaction_id,
        status=transaction.status,
        type=transaction.type,
        payment_method=transaction.payment_method,
        amount=transaction.amount,
        data=transaction.data,
        invoice_id=transaction.invoice_id,
        order_id=transaction.order_id,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )
