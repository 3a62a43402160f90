# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from .entities import StoreSettings


class StoreSettingsRepository(Protocol):
    async def get(self, tenant_id: str) -> StoreSettings | None: ...

    async def update(self, tenant_id: str, changes: Mapping[str, str | None], updated_at: int) -> None:
        """Apply column changes, creating the tenant's row when it is missing."""
        ...
