from __future__ import annotations

import asyncio
from collections.abc import Iterator

import pytest

from farmstand.app import create_app
from farmstand.infrastructure.db import drop_db, init_db

IP = {"X-Forwarded-For": "203.0.113.7"}


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    asyncio.run(drop_db())
    asyncio.run(init_db())
    yield
    asyncio.run(drop_db())


def test_bootstrap_login_throttle_logout_flow() -> None:
    app = create_app()

    with app.test_client() as client:
        short = client.post("/api/auth/login", json={"password": "short"}, headers=IP)
        assert short.status_code == 422

        first = client.post("/api/auth/login", json={"password": "longenough1"}, headers=IP)
        assert first.status_code == 200
        token = first.get_json()["token"]
        bearer = {"Authorization": f"Bearer {token}"}

        again = client.post("/api/auth/login", json={"password": "longenough1"}, headers=IP)
        assert again.status_code == 200
        assert again.get_json()["token"] != token

        for _ in range(9):
            wrong = client.post("/api/auth/login", json={"password": "wrongpass"}, headers=IP)
            assert wrong.status_code == 401
            assert wrong.get_json() == {"error": "invalid_credentials"}

        blocked = client.post("/api/auth/login", json={"password": "longenough1"}, headers=IP)
        assert blocked.status_code == 429
        assert blocked.headers["Retry-After"] == "900"

        other = client.post(
            "/api/auth/login",
            json={"password": "longenough1"},
            headers={"X-Forwarded-For": "198.51.100.1"},
        )
        assert other.status_code == 200

        assert client.get("/api/auth/verify", headers=bearer).get_json() == {"valid": True}

        assert client.post("/api/auth/logout", headers=bearer).status_code == 200
        assert client.post("/api/auth/logout", headers=bearer).status_code == 200

        assert client.get("/api/auth/verify", headers=bearer).get_json() == {"valid": False}


def test_settings_flow_never_exposes_secrets() -> None:
    app = create_app()

    with app.test_client() as client:
        token = client.post(
            "/api/auth/login", json={"password": "longenough1"}, headers=IP
        ).get_json()["token"]
        bearer = {"Authorization": f"Bearer {token}"}

        denied = client.put("/api/settings", json={"name": "Hijacked"})
        assert denied.status_code == 401

        updated = client.put(
            "/api/settings",
            json={
                "name": "Hillside Farm",
                "venmo_handle": "@hillside",
                "stripe_secret_key": "sk_test_abcdefghijklmnop",
                "apple_pay_domain_file": "merchant-file",
            },
            headers=bearer,
        )
        assert updated.status_code == 200

        public = client.get("/api/settings").get_json()
        admin = client.get("/api/settings", headers=bearer).get_json()

        assert public["name"] == "Hillside Farm"
        assert public["venmo_handle"] == "hillside"
        assert "apple_pay_domain_file" not in public
        assert admin["apple_pay_domain_file"] == "merchant-file"
        for view in (public, admin):
            assert "stripe_secret_key" not in view
            assert "admin_password_hash" not in view

        rotated = client.put(
            "/api/settings", json={"admin_password": "brand-new-pass"}, headers=bearer
        )
        assert rotated.status_code == 200

        old = client.post("/api/auth/login", json={"password": "longenough1"}, headers=IP)
        assert old.status_code == 401
        new = client.post("/api/auth/login", json={"password": "brand-new-pass"}, headers=IP)
        assert new.status_code == 200


def test_health_reports_database() -> None:
    app = create_app()

    with app.test_client() as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}


def test_metrics_count_login_outcomes() -> None:
    app = create_app()

    with app.test_client() as client:
        client.post("/api/auth/login", json={"password": "longenough1"}, headers=IP)
        client.post("/api/auth/login", json={"password": "wrongpass"}, headers=IP)
        response = client.get("/api/metrics")

    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert 'farmstand_admin_logins_total{outcome="bootstrapped"}' in body
    assert 'farmstand_admin_logins_total{outcome="failed"}' in body
    assert "farmstand_request_latency_seconds" in body
