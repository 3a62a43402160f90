# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping

from farmstand.domain.stores.entities import StoreSettings
from farmstand.domain.stores.repositories import StoreSettingsRepository
from farmstand.infrastructure.db.models import Store
from farmstand.infrastructure.db.session import session_scope

_WRITABLE_COLUMNS = frozenset(
    {
        "name",
        "logo_url",
        "color_primary",
        "color_secondary",
        "color_accent",
        "stripe_publishable_key",
        "stripe_secret_key",
        "venmo_handle",
        "apple_pay_domain_file",
    }
)


class SqlAlchemyStoreSettingsRepository(StoreSettingsRepository):
    async def get(self, tenant_id: str) -> StoreSettings | None:
        async with session_scope() as session:
            row = await session.get(Store, tenant_id)
            if row is None:
                return None
            return StoreSettings(
                id=row.id,
                name=row.name,
                logo_url=row.logo_url,
                color_primary=row.color_primary,
                color_secondary=row.color_secondary,
                color_accent=row.color_accent,
                stripe_publishable_key=row.stripe_publishable_key,
                venmo_handle=row.venmo_handle,
                apple_pay_domain_file=row.apple_pay_domain_file,
                updated_at=row.updated_at,
            )

    async def update(
        self, tenant_id: str, changes: Mapping[str, str | None], updated_at: int
    ) -> None:
        unknown = set(changes) - _WRITABLE_COLUMNS
        if unknown:
            raise ValueError(f"not writable store columns: {sorted(unknown)}")

        async with session_scope() as session:
            row = await session.get(Store, tenant_id)
            if row is None:
                row = Store(id=tenant_id, created_at=updated_at, updated_at=updated_at)
                session.add(row)
            for column, value in changes.items():
                setattr(row, column, value)
            row.updated_at = updated_at
