# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import asyncio
import importlib
from typing import Any, Protocol, cast

from flask import Flask

from farmstand.infrastructure.container import Container, container
from farmstand.infrastructure.db import init_db
from farmstand.shared.config import load_config
from farmstand.shared.logging import logger, setup_logging
from farmstand.shared.middleware.error_handler import configure_error_handling
from farmstand.shared.middleware.origin_guard import configure_origin_guard
from farmstand.shared.middleware.request_logger import configure_request_logging, trust_proxies


class _CORSCallable(Protocol):
    def __call__(self, app: Flask, **kwargs: Any) -> Any: ...


_flask_cors = importlib.import_module("flask_cors")
CORS = cast(_CORSCallable, _flask_cors.CORS)


_config = load_config()


def create_app(app_container: Container | None = None) -> Flask:
    setup_logging(debug_mode=_config.debug_logging)
    asyncio.run(init_db())

    deps = app_container or container

    app = Flask(__name__)
    trust_proxies(app, _config.security.trusted_proxy_count)
    configure_error_handling(app)
    configure_request_logging(app)
    configure_origin_guard(app)

    CORS(
        app,
        resources={r"/api/*": {"origins": _config.security.allowed_origins}},
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )
    app.register_blueprint(deps.misc_controller.as_blueprint())
    app.register_blueprint(deps.auth_controller.as_blueprint())
    app.register_blueprint(deps.settings_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")

        if _config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info("Flask app initialized")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
