# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from flask import g, request

from farmstand.application.use_cases.auth.verify_session import VerifySessionUseCase
from farmstand.shared.errors.base import UnauthorizedError
from farmstand.shared.logging import logger


def bearer_token() -> str | None:
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    return auth[7:].strip() or None


def auth_required(verify: VerifySessionUseCase):
    """Reject the wrapped view with 401 unless it carries a live session token."""

    def decorator(f: Callable[..., Awaitable[Any]]):
        @wraps(f)
        async def inner(*args, **kwargs):
            token = bearer_token()
            if not token:
                logger.warning(f"No bearer token on {request.method} {request.path}")
                raise UnauthorizedError()

            if not await verify.execute(token):
                logger.warning(
                    f"Auth failed (token unknown or expired) on {request.method} {request.path}"
                )
                raise UnauthorizedError()

            g.authenticated = True
            logger.debug(f"Auth OK: {request.method} {request.path}")
            return await f(*args, **kwargs)

        return inner

    return decorator


__all__ = ["auth_required", "bearer_token"]
