# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from farmstand.domain.stores.repositories import StoreSettingsRepository
from farmstand.shared.errors.base import StoreNotFoundError


class GetStoreSettingsUseCase:
    def __init__(self, *, stores: StoreSettingsRepository) -> None:
        self._stores = stores

    async def execute(self, tenant_id: str, *, include_admin_fields: bool = False) -> dict[str, str | None]:
        settings = await self._stores.get(tenant_id)
        if settings is None:
            raise StoreNotFoundError(tenant_id)
        return settings.view(include_admin_fields=include_admin_fields)
