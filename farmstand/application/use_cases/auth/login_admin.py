# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from farmstand.application.services.login_throttle import LoginThrottle
from farmstand.application.services.session_tokens import SessionTokenService
from farmstand.domain.auth.exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    PasswordRequiredError,
    PasswordTooShortError,
)
from farmstand.domain.auth.repositories import CredentialRepository, PasswordHasher
from farmstand.shared.logging import logger
from farmstand.shared.utils.clock import Clock, unix_now

DEFAULT_MIN_PASSWORD_LENGTH = 8


@dataclass(slots=True, frozen=True)
class LoginOutcome:
    token: str
    bootstrapped: bool = False


class LoginAdminUseCase:
    """Exchange the admin password for a bearer session token.

    While a store has no credential, the first submission long enough to be a
    password becomes the credential and is answered with a session right away.
    Afterwards every submission goes through the login throttle, and every
    attempt it lets through is recorded whether or not the password matched.
    """

    def __init__(
        self,
        *,
        credentials: CredentialRepository,
        throttle: LoginThrottle,
        sessions: SessionTokenService,
        password_hasher: PasswordHasher,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
        clock: Clock = unix_now,
    ) -> None:
        self._credentials = credentials
        self._throttle = throttle
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._min_password_length = min_password_length
        self._clock = clock

    async def execute(self, password: str, client_address: str, tenant_id: str) -> LoginOutcome:
        if not password:
            raise PasswordRequiredError()
        client_address = client_address or "unknown"

        now = self._clock()
        if await self._throttle.is_blocked(client_address, now):
            logger.warning(f"auth.login: throttled address={client_address}")
            raise LoginRateLimitedError(retry_after=self._throttle.window_seconds)

        stored = await self._credentials.get_hash(tenant_id)
        if stored is None:
            if await self._bootstrap(password, tenant_id):
                session = await self._sessions.issue()
                return LoginOutcome(token=session.token, bootstrapped=True)
            # Another request stored the first credential between our read and write
            stored = await self._credentials.get_hash(tenant_id)

        valid = self._password_hasher.verify(password, stored or "")

        await self._throttle.record(client_address, now)
        await self._throttle.prune(now)

        if not valid:
            raise InvalidCredentialsError()

        session = await self._sessions.issue()
        return LoginOutcome(token=session.token)

    async def _bootstrap(self, password: str, tenant_id: str) -> bool:
        if len(password) < self._min_password_length:
            raise PasswordTooShortError(self._min_password_length)

        hashed = self._password_hasher.hash(password)
        claimed = await self._credentials.claim_initial_hash(tenant_id, hashed)
        if claimed:
            logger.info(f"auth.bootstrap: initial admin credential set for store={tenant_id}")
        else:
            logger.warning(f"auth.bootstrap: lost initial credential race for store={tenant_id}")
        return claimed
