"""Repositories for admin accounts, roles and revoked tokens."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from ..dbmodels import Admins, RevokedTokens, Roles
from .base import Repository


class AdminRepository(Repository[Admins]):
    model = Admins

    async def find_by_email(self, email: str) -> Admins | None:
        result = await self.session.execute(select(Admins).where(Admins.email == email))
        return result.scalar_one_or_none()

    async def email_taken(self, email: str, ignore_id: int | None = None) -> bool:
        """Check whether ``email`` belongs to any admin other than ``ignore_id``."""
        stmt = select(Admins.id).where(Admins.email == email)
        if ignore_id is not None:
            stmt = stmt.where(Admins.id != ignore_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None


class RoleRepository(Repository[Roles]):
    model = Roles


class RevokedTokenRepository(Repository[RevokedTokens]):
    model = RevokedTokens

    async def revoke(self, jti: str, expires_at: datetime, admin_id: int | None = None) -> None:
        if await self.is_revoked(jti):
            return
        await self.create({"jti": jti, "admin_id": admin_id, "expires_at": expires_at})

    async def is_revoked(self, jti: str) -> bool:
        result = await self.session.execute(
            select(RevokedTokens.id).where(RevokedTokens.jti == jti).limit(1)
        )
        return result.scalar_one_or_none() is not None
