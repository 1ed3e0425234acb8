"""Persistence layer: one repository per ORM model, bound to a session."""

from .admins import AdminRepository, RevokedTokenRepository, RoleRepository
from .base import Repository
from .sales import CatalogRuleRepository, TransactionRepository

__all__ = [
    "Repository",
    "AdminRepository",
    "RoleRepository",
    "RevokedTokenRepository",
    "CatalogRuleRepository",
    "TransactionRepository",
]
