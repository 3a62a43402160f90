# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import ADMIN_FIELDS, PUBLIC_FIELDS, StoreSettings
from .repositories import StoreSettingsRepository

__all__ = [
    "ADMIN_FIELDS",
    "PUBLIC_FIELDS",
    "StoreSettings",
    "StoreSettingsRepository",
]
