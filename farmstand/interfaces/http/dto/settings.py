from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class UpdateSettingsRequestDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, max_length=128)
    logo_url: str | None = Field(None, max_length=512)
    color_primary: str | None = None
    color_secondary: str | None = None
    color_accent: str | None = None
    stripe_publishable_key: str | None = Field(None, max_length=256)
    stripe_secret_key: str | None = Field(None, max_length=256)
    venmo_handle: str | None = Field(None, max_length=64)
    apple_pay_domain_file: str | None = Field(None, max_length=65536)
    admin_password: str | None = Field(None, max_length=256)

    @field_validator("color_primary", "color_secondary", "color_accent")
    @classmethod
    def validate_color(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return value
        if not _HEX_COLOR.match(value):
            raise PydanticCustomError(
                "color_invalid",
                "Color must be a hex value such as #2D5016",
                {"pattern": _HEX_COLOR.pattern},
            )
        return value

    @field_validator("venmo_handle")
    @classmethod
    def strip_venmo_at(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return value.strip().lstrip("@")

    def changes(self) -> dict[str, str | None]:
        return self.model_dump(exclude_unset=True)
