# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

PUBLIC_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "logo_url",
    "color_primary",
    "color_secondary",
    "color_accent",
    "stripe_publishable_key",
    "venmo_handle",
)

ADMIN_FIELDS: tuple[str, ...] = PUBLIC_FIELDS + ("apple_pay_domain_file",)


@dataclass(slots=True, frozen=True)
class StoreSettings:
    """Store branding and payment configuration.

    The admin password hash and the payment processor secret key live on the
    same row but are never loaded into this object.
    """

    id: str
    name: str | None = None
    logo_url: str | None = None
    color_primary: str | None = None
    color_secondary: str | None = None
    color_accent: str | None = None
    stripe_publishable_key: str | None = None
    venmo_handle: str | None = None
    apple_pay_domain_file: str | None = None
    updated_at: int | None = None

    def view(self, *, include_admin_fields: bool = False) -> dict[str, str | None]:
        fields = ADMIN_FIELDS if include_admin_fields else PUBLIC_FIELDS
        return {field: getattr(self, field) for field in fields}
