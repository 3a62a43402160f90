"""Use-case answering whether a bearer token belongs to a live admin session."""

from __future__ import annotations

from farmstand.application.services.session_tokens import SessionTokenService


class VerifySessionUseCase:
    def __init__(self, *, sessions: SessionTokenService) -> None:
        self._sessions = sessions

    async def execute(self, token: str | None) -> bool:
        return await self._sessions.is_authenticated(token)
