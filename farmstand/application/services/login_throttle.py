# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from farmstand.domain.auth.repositories import LoginAttemptRepository
from farmstand.shared.logging import logger

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_WINDOW_SECONDS = 15 * 60


class LoginThrottle:
    """Sliding-window limit on login attempts per client address.

    All state lives in the attempt repository; the check and the insert are
    separate statements, so concurrent requests may overshoot the limit by a
    few attempts.
    """

    def __init__(
        self,
        attempts: LoginAttemptRepository,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
    ) -> None:
        self._attempts = attempts
        self._max_attempts = max(1, int(max_attempts))
        self._window = max(1, int(window_seconds))

    @property
    def window_seconds(self) -> int:
        return self._window

    async def is_blocked(self, client_address: str, now: int) -> bool:
        recent = await self._attempts.count_since(client_address, now - self._window)
        return recent >= self._max_attempts

    async def record(self, client_address: str, now: int) -> None:
        await self._attempts.add(client_address, now)

    async def prune(self, now: int) -> None:
        cutoff = now - 2 * self._window
        try:
            await self._attempts.delete_before(cutoff)
        except Exception as exc:
            logger.warning(f"login_throttle: pruning attempts before {cutoff} failed: {exc!r}")


__all__ = ["LoginThrottle", "DEFAULT_MAX_ATTEMPTS", "DEFAULT_WINDOW_SECONDS"]
