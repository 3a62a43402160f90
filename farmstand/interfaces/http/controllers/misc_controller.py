# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from farmstand.infrastructure.health import check_database
from farmstand.infrastructure.observability import render_metrics
from farmstand.shared.logging import logger


class MiscController:
    def __init__(self, *, metrics_enabled: bool = True) -> None:
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/api/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    async def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            await check_database()
            status["database"] = "ok"
        except Exception as exc:
            logger.error(f"health: database check failed: {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status), 200

    def metrics(self) -> Response:
        payload, content_type = render_metrics()
        return Response(payload, content_type=content_type)
