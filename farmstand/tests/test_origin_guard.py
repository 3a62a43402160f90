from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask

from farmstand.app import create_app
from farmstand.shared.config import load_config
from farmstand.shared.middleware.origin_guard import is_origin_allowed

ALLOWED = "https://farmstand.example.com"


@pytest.mark.parametrize(
    ("origin", "allowed", "host", "expected"),
    [
        ("", ALLOWED, "farmstand.example.com", True),
        (ALLOWED, ALLOWED, "api.example.com", True),
        ("https://preview.pages.dev", ALLOWED, "preview.pages.dev", True),
        ("https://evil.example.net", ALLOWED, "farmstand.example.com", False),
        ("null", ALLOWED, "farmstand.example.com", False),
        ("https://anything.example.net", None, "farmstand.example.com", True),
    ],
)
def test_is_origin_allowed(origin: str, allowed: str | None, host: str, expected: bool) -> None:
    assert is_origin_allowed(origin, allowed, host) is expected


@pytest.fixture()
def guarded_app(monkeypatch: pytest.MonkeyPatch) -> Iterator[Flask]:
    monkeypatch.setenv("ALLOWED_ORIGIN", ALLOWED)
    load_config.cache_clear()
    yield create_app()
    load_config.cache_clear()


def test_foreign_origin_is_rejected(guarded_app: Flask) -> None:
    with guarded_app.test_client() as client:
        response = client.get(
            "/api/auth/verify", headers={"Origin": "https://evil.example.net"}
        )

    assert response.status_code == 403
    assert response.get_json() == {"error": "forbidden"}


@pytest.mark.parametrize("origin", [ALLOWED, "http://localhost"])
def test_allowed_and_same_host_origins_pass(guarded_app: Flask, origin: str) -> None:
    with guarded_app.test_client() as client:
        response = client.get("/api/auth/verify", headers={"Origin": origin})

    assert response.status_code == 200
    assert response.get_json() == {"valid": False}
