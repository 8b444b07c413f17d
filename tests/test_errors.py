"""
Tests for the error envelope, store failure mapping and log redaction.
"""

from __future__ import annotations

import logging

from fastapi.testclient import TestClient

from airdrop.core.config import Settings
from airdrop.core.logging import REDACTED, scrub_sensitive
from airdrop.main import create_app
from airdrop.repositories import InMemoryStore, StoreError, StoreUnavailable

from conftest import FakeClock, WALLET_A


class FailingStore(InMemoryStore):
    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    async def get_registration_by_wallet(self, wallet_address):
        raise self.error

    async def update_registration(self, wallet_address, merge):
        raise self.error


def client_for(store, environment="test"):
    app = create_app(settings=Settings(ENVIRONMENT=environment), store=store, clock=FakeClock())
    return TestClient(app, raise_server_exceptions=False)


def test_ping(client):
    r = client.get("/api/ping")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "ping"
    assert body["status"] == "ok"
    assert body["timestamp"]
    assert "X-Request-ID" in r.headers


def test_root_describes_service(client):
    r = client.get("/")
    assert r.status_code == 200
    body = r.json()
    assert body["ping"] == "/api/ping"
    assert body["version"]


def test_unknown_endpoint_uses_error_envelope(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    body = r.json()
    assert body == {
        "success": False,
        "error": "Endpoint not found",
        "message": "Cannot GET /api/nope",
        "timestamp": body["timestamp"],
        "path": "/api/nope",
    }


def test_store_unavailable_is_503():
    client = client_for(FailingStore(StoreUnavailable("connection refused")))

    r = client.get(f"/api/registration/{WALLET_A}")
    assert r.status_code == 503
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Service temporarily unavailable"


def test_store_error_is_500_with_debug_outside_production():
    client = client_for(FailingStore(StoreError("syntax error at or near")))

    r = client.get(f"/api/registration/{WALLET_A}")
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Database operation failed"
    assert body["debug"]["type"] == "StoreError"


def test_production_hides_internal_details():
    client = client_for(FailingStore(StoreError("syntax error at or near")), environment="production")

    r = client.get(f"/api/registration/{WALLET_A}")
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Database operation failed"
    assert "debug" not in body
    assert "syntax error" not in r.text


def test_unhandled_error_is_500():
    client = client_for(FailingStore(RuntimeError("kaboom")), environment="production")

    r = client.get(f"/api/registration/{WALLET_A}")
    assert r.status_code == 500
    assert r.json()["error"] == "Internal server error"
    assert "kaboom" not in r.text
    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


def test_error_log_redacts_personal_data(caplog):
    client = client_for(FailingStore(StoreError("write failed")))

    with caplog.at_level(logging.ERROR, logger="airdrop.core.errors"):
        r = client.put("/api/registration/verify", json={
            "wallet_address": WALLET_A,
            "tweet_url": "https://x.com/secret_person/status/1",
            "twitter_followed": True,
        })

    assert r.status_code == 500
    assert "Database operation failed" in caplog.text
    assert REDACTED in caplog.text
    assert WALLET_A not in caplog.text
    assert "secret_person" not in caplog.text
    assert "'twitter_followed': True" in caplog.text


def test_scrub_sensitive_walks_nested_data():
    data = {
        "email": "a@mail.com",
        "Wallet_Address": WALLET_A,
        "api_key": "k",
        "access_token": "t",
        "profile": {"telegram": "tg", "friends_invited": 2},
        "events": [{"referee_wallet_address": WALLET_A}],
        "twitter_followed": True,
    }

    assert scrub_sensitive(data) == {
        "email": REDACTED,
        "Wallet_Address": REDACTED,
        "api_key": REDACTED,
        "access_token": REDACTED,
        "profile": {"telegram": REDACTED, "friends_invited": 2},
        "events": [{"referee_wallet_address": REDACTED}],
        "twitter_followed": True,
    }
    assert scrub_sensitive("plain") == "plain"
    assert scrub_sensitive(None) is None
