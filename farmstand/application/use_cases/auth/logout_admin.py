"""Use-case for revoking admin session tokens."""

from __future__ import annotations

from farmstand.application.services.session_tokens import SessionTokenService


class LogoutAdminUseCase:
    def __init__(self, *, sessions: SessionTokenService) -> None:
        self._sessions = sessions

    async def execute(self, token: str | None) -> None:
        await self._sessions.revoke(token)
