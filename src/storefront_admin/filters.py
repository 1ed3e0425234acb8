"""
Query filters translating GraphQL filter arguments into ORM predicates.

A filter renames the externally exposed argument names to column names and
then ANDs an equality condition for every remaining key. Keys without a
rename pass through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from sqlalchemy import Select

StmtT = TypeVar("StmtT", bound=Select)


class BaseFilter:
    """Equality-conjunction filter with optional key renames."""

    renames: Mapping[str, str] = MappingProxyType({})

    def translate(self, input: Mapping[str, Any] | None) -> dict[str, Any]:
        """Return a copy of ``input`` with renamed keys; the original is not modified."""
        translated = dict(input or {})
        for external, internal in self.renames.items():
            if external in translated:
                translated[internal] = translated.pop(external)
        return translated

    def __call__(self, stmt: StmtT, input: Mapping[str, Any] | None) -> StmtT:
        translated = self.translate(input)
        if not translated:
            return stmt
        return stmt.filter_by(**translated)


class CatalogRuleFilter(BaseFilter):
    """Promotion (catalog rule) filter."""

    renames = MappingProxyType(
        {
            "start": "starts_from",
            "end": "ends_till",
            "priority": "sort_order",
        }
    )


class TransactionFilter(BaseFilter):
    """Sales transaction filter; argument names already match the columns."""


class AdminUserFilter(BaseFilter):
    """Admin user listing filter."""


filter_catalog_rules = CatalogRuleFilter()
filter_transactions = TransactionFilter()
filter_admin_users = AdminUserFilter()
