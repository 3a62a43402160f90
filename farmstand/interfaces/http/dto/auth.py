from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequestDTO(BaseModel):
    # Length rules for the first password are enforced by the login use case
    password: str = Field(min_length=1, max_length=256)


class LoginSuccessDTO(BaseModel):
    token: str


class SessionStatusDTO(BaseModel):
    valid: bool


class OkDTO(BaseModel):
    ok: bool = True
