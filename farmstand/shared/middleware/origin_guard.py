# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from urllib.parse import urlsplit

from flask import Flask, request

from farmstand.shared.config import load_config
from farmstand.shared.errors.base import ForbiddenOriginError
from farmstand.shared.logging import logger


def is_origin_allowed(origin: str, allowed_origin: str | None, request_host: str) -> bool:
    """Same-host requests always pass, so preview hostnames keep working."""
    if not allowed_origin or not origin or origin == allowed_origin:
        return True
    origin_host = urlsplit(origin).netloc
    if not origin_host:
        return False
    return origin_host == request_host


def configure_origin_guard(app: Flask) -> None:
    allowed_origin = load_config().security.allowed_origin
    if not allowed_origin:
        return

    @app.before_request
    def _reject_foreign_origin() -> None:
        origin = request.headers.get("Origin", "")
        if not is_origin_allowed(origin, allowed_origin, request.host):
            logger.warning(f"origin_guard: rejected origin={origin} on {request.method} {request.path}")
            raise ForbiddenOriginError()


__all__ = ["configure_origin_guard", "is_origin_allowed"]
