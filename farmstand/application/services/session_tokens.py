# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from farmstand.domain.auth.entities import AdminSession
from farmstand.domain.auth.repositories import AdminSessionRepository
from farmstand.shared.utils.clock import Clock, unix_now

DEFAULT_SESSION_LIFETIME = 7 * 24 * 60 * 60
TOKEN_BYTES = 48


class SessionTokenService:
    """Issues and checks opaque admin bearer tokens.

    Expiry is fixed at issue time. Unknown and expired tokens are reported
    the same way.
    """

    def __init__(
        self,
        sessions: AdminSessionRepository,
        *,
        lifetime_seconds: int = DEFAULT_SESSION_LIFETIME,
        clock: Clock = unix_now,
    ) -> None:
        self._sessions = sessions
        self._lifetime = lifetime_seconds
        self._clock = clock

    async def issue(self) -> AdminSession:
        now = self._clock()
        session = AdminSession(
            token=secrets.token_urlsafe(TOKEN_BYTES),
            created_at=now,
            expires_at=now + self._lifetime,
        )
        await self._sessions.add(session)
        return session

    async def is_authenticated(self, token: str | None) -> bool:
        if not token:
            return False
        return await self._sessions.exists_valid(token, self._clock())

    async def revoke(self, token: str | None) -> None:
        if token:
            await self._sessions.delete(token)


__all__ = ["SessionTokenService", "DEFAULT_SESSION_LIFETIME"]
