"""Read-side repositories for marketing and sales records."""

from ..dbmodels import CatalogRules, OrderTransactions
from .base import Repository


class CatalogRuleRepository(Repository[CatalogRules]):
    model = CatalogRules


class TransactionRepository(Repository[OrderTransactions]):
    model = OrderTransactions
