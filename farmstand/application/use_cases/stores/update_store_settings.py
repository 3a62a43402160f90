# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping

from farmstand.domain.auth.exceptions import PasswordTooShortError
from farmstand.domain.auth.repositories import CredentialRepository, PasswordHasher
from farmstand.domain.stores.repositories import StoreSettingsRepository
from farmstand.shared.utils.clock import Clock, unix_now

EDITABLE_FIELDS: tuple[str, ...] = (
    "name",
    "logo_url",
    "color_primary",
    "color_secondary",
    "color_accent",
    "stripe_publishable_key",
    "venmo_handle",
    "apple_pay_domain_file",
)


class UpdateStoreSettingsUseCase:
    """Apply a partial settings update for an authenticated admin.

    Plain fields are written whenever they are supplied. The payment secret
    key and the admin password are write-only and ignored when empty, so a
    settings form can be saved without re-entering them.
    """

    def __init__(
        self,
        *,
        stores: StoreSettingsRepository,
        credentials: CredentialRepository,
        password_hasher: PasswordHasher,
        min_password_length: int = 8,
        clock: Clock = unix_now,
    ) -> None:
        self._stores = stores
        self._credentials = credentials
        self._password_hasher = password_hasher
        self._min_password_length = min_password_length
        self._clock = clock

    async def execute(self, tenant_id: str, changes: Mapping[str, str | None]) -> list[str]:
        updates: dict[str, str | None] = {
            field: changes[field] for field in EDITABLE_FIELDS if field in changes
        }
        secret_key = changes.get("stripe_secret_key")
        if secret_key:
            updates["stripe_secret_key"] = secret_key

        new_password = changes.get("admin_password")
        if new_password and len(new_password) < self._min_password_length:
            raise PasswordTooShortError(self._min_password_length)

        changed = sorted(updates)
        if new_password:
            changed.append("admin_password")
        if not changed:
            return []

        # A failed password write leaves the settings row untouched
        if new_password:
            await self._credentials.set_hash(tenant_id, self._password_hasher.hash(new_password))
        if updates:
            await self._stores.update(tenant_id, updates, self._clock())
        return changed
