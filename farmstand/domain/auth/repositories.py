# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import AdminSession


class CredentialRepository(Protocol):
    async def get_hash(self, tenant_id: str) -> str | None: ...

    async def set_hash(self, tenant_id: str, password_hash: str) -> None: ...

    async def claim_initial_hash(self, tenant_id: str, password_hash: str) -> bool:
        """Store the hash only if the tenant has none yet; report whether it did."""
        ...


class LoginAttemptRepository(Protocol):
    async def count_since(self, client_address: str, since: int) -> int: ...

    async def add(self, client_address: str, attempted_at: int) -> None: ...

    async def delete_before(self, timestamp: int) -> None: ...


class AdminSessionRepository(Protocol):
    async def add(self, session: AdminSession) -> None: ...

    async def exists_valid(self, token: str, now: int) -> bool: ...

    async def delete(self, token: str) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...
