"""Admin user management: create, update, delete and lookups."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError

from .. import events as lifecycle
from ..auth.passwords import generate_api_token, hash_password
from ..dbmodels import Admins
from ..errors import InvariantError, NotFoundError, ValidationError, wrap_errors
from ..events import EventDispatcher
from ..filters import filter_admin_users
from ..i18n import trans
from ..logging import get_logger
from ..repositories import AdminRepository, RoleRepository
from ..storage import ImageStore
from .inputs import AdminCreateInput, AdminUpdateInput, ModelT, normalize_email, validate_input

logger = get_logger(__name__)

IMAGE_PREFIX = "admins/"
IMAGE_FIELD = "image"

# Input keys that never reach the admins table directly
_NON_COLUMN_FIELDS = {"password", "password_confirmation", "image"}


@dataclass
class AdminMutationResult:
    admin: Admins
    success: str


@dataclass
class DeleteResult:
    success: str


class AdminUserService:
    """Admin account CRUD with lifecycle events and image attachment."""

    def __init__(
        self,
        admins: AdminRepository,
        roles: RoleRepository,
        events: EventDispatcher,
        images: ImageStore,
    ):
        self.admins = admins
        self.roles = roles
        self.events = events
        self.images = images
        # Files to remove once the session commits, or rolls back
        self._stale_images: list[str] = []
        self._new_images: list[str] = []

    async def find(self, id: int) -> Admins | None:
        return await self.admins.find(id)

    async def list(
        self, filter: Mapping[str, Any] | None = None, limit: int = 50, offset: int = 0
    ) -> Sequence[Admins]:
        stmt = filter_admin_users(self.admins.query(), filter)
        return await self.admins.fetch(stmt, limit=limit, offset=offset)

    async def create(self, input: Mapping[str, Any] | None) -> AdminMutationResult:
        if not input:
            raise ValidationError(trans("admin.response.error.invalid-parameter"))

        data = await self._validate(AdminCreateInput, input)

        if await self.roles.find(data.role_id) is None:
            raise NotFoundError(trans("admin.settings.roles.not-found"))

        with wrap_errors():
            values = data.model_dump(exclude=_NON_COLUMN_FIELDS, exclude_none=True)

            if data.password:
                values["password"] = hash_password(data.password)
                values["api_token"] = generate_api_token()

            await self.events.dispatch(lifecycle.ADMIN_CREATE_BEFORE)

            admin = await self._persist(self.admins.create(values), data.email)

            if data.image:
                await self._attach_image(admin, data.image)

            await self.events.dispatch(lifecycle.ADMIN_CREATE_AFTER, admin)

            logger.info("Admin created", admin_id=admin.id, role_id=admin.role_id)
            return AdminMutationResult(admin, trans("admin.settings.users.create-success"))

    async def update(self, id: int | None, input: Mapping[str, Any] | None) -> AdminMutationResult:
        if not id or not input:
            raise ValidationError(trans("admin.response.error.invalid-parameter"))

        data = await self._validate(AdminUpdateInput, input, ignore_id=id)

        if await self.admins.find(id) is None:
            raise NotFoundError(trans("admin.settings.users.not-found"))

        if await self.roles.find(data.role_id) is None:
            raise NotFoundError(trans("admin.settings.roles.not-found"))

        with wrap_errors():
            values = data.model_dump(exclude=_NON_COLUMN_FIELDS | {"status"})
            values["status"] = bool(data.status)

            password_changed = False
            if data.password:
                values["password"] = hash_password(data.password)
                password_changed = True

            await self.events.dispatch(lifecycle.ADMIN_UPDATE_BEFORE, id)

            admin = await self._persist(self.admins.update(values, id), data.email)

            if data.image:
                await self._attach_image(admin, data.image)

            if password_changed:
                await self.events.dispatch(lifecycle.ADMIN_UPDATE_PASSWORD, admin)

            await self.events.dispatch(lifecycle.ADMIN_UPDATE_AFTER, admin)

            logger.info("Admin updated", admin_id=admin.id, password_changed=password_changed)
            return AdminMutationResult(admin, trans("admin.settings.users.update-success"))

    async def delete(self, id: int | None) -> DeleteResult:
        if not id:
            raise ValidationError(trans("admin.response.error.invalid-parameter"))

        admin = await self.admins.find(id)
        if admin is None:
            raise NotFoundError(trans("admin.settings.users.not-found"))

        if await self.admins.count() == 1:
            raise InvariantError(trans("admin.settings.users.last-delete-error"))

        with wrap_errors():
            await self.events.dispatch(lifecycle.ADMIN_DELETE_BEFORE, id)

            image = admin.image
            await self.admins.delete(id)
            if image:
                self._stale_images.append(image)

            await self.events.dispatch(lifecycle.ADMIN_DELETE_AFTER, id)

            logger.info("Admin deleted", admin_id=id)
            return DeleteResult(trans("admin.settings.users.delete-success"))

    async def release_stale_images(self) -> None:
        """Delete files that committed mutations no longer reference."""
        stale, self._stale_images = self._stale_images, []
        self._new_images.clear()
        await self.images.delete_keys(stale)

    async def discard_new_images(self) -> None:
        """Delete files uploaded by mutations that were rolled back."""
        new, self._new_images = self._new_images, []
        self._stale_images.clear()
        await self.images.delete_keys(new)

    async def _attach_image(self, admin: Admins, source: str) -> None:
        previous = admin.image
        key = await self.images.upload_image(admin, source, IMAGE_PREFIX, IMAGE_FIELD)
        if key and key != previous:
            self._new_images.append(key)
            if previous:
                self._stale_images.append(previous)

    async def _validate(
        self, model: type[ModelT], input: Mapping[str, Any], ignore_id: int | None = None
    ) -> ModelT:
        errors = []
        email = normalize_email(input.get("email"))
        if email and await self.admins.email_taken(email, ignore_id):
            errors.append(f"email: {trans('admin.settings.users.email-taken', email=email)}")
        return validate_input(model, input, extra_errors=errors)

    async def _persist(self, write: Any, email: str) -> Admins:
        try:
            return await write
        except IntegrityError as e:
            # Unique constraint backing the email check above
            raise ValidationError(trans("admin.settings.users.email-taken", email=email)) from e
