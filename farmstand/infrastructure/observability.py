# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from farmstand.shared.config import load_config

_config = load_config()

REQUEST_LATENCY = Histogram(
    "farmstand_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_COUNTER = Counter(
    "farmstand_requests_total",
    "Number of processed requests",
    labelnames=("endpoint", "status"),
)
LOGIN_OUTCOMES = Counter(
    "farmstand_admin_logins_total",
    "Admin login attempts by outcome",
    labelnames=("outcome",),
)


def observe_request(endpoint: str, status: int, duration: float) -> None:
    if not _config.observability.metrics_enabled:
        return
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
    REQUEST_COUNTER.labels(endpoint=endpoint, status=str(status)).inc()


def record_login_outcome(outcome: str) -> None:
    if not _config.observability.metrics_enabled:
        return
    LOGIN_OUTCOMES.labels(outcome=outcome).inc()


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "LOGIN_OUTCOMES",
    "REQUEST_COUNTER",
    "REQUEST_LATENCY",
    "observe_request",
    "record_login_outcome",
    "render_metrics",
]
