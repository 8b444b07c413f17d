"""
Pytest fixtures for airdrop API tests. Uses the in-memory store and a
controllable clock so rate limit windows can be stepped through.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from airdrop.core.config import Settings
from airdrop.main import create_app
from airdrop.repositories import InMemoryStore

# Valid Solana pubkeys (base58, 32 bytes)
WALLET_A = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
WALLET_B = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
WALLET_C = "So11111111111111111111111111111111111111112"


def make_wallet(index: int) -> str:
    """Distinct base58 wallet for bulk registrations"""
    alphabet = "ABCDEFGHJKLMNPQRSTUVWXYZ"
    return alphabet[index % len(alphabet)] * 40 + "abcd"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def settings():
    return Settings(ENVIRONMENT="test")


@pytest.fixture
def app(settings, store, clock):
    return create_app(settings=settings, store=store, clock=clock)


@pytest.fixture
def client(app):
    """FastAPI TestClient bound to the in-memory store"""
    return TestClient(app)


@pytest.fixture
def register(client):
    """POST a registration with sensible defaults"""
    def _register(wallet: str = WALLET_A, email: str = "alice@mail.com", **extra):
        payload = {"email": email, "wallet_address": wallet, **extra}
        return client.post("/api/registration", json=payload)

    return _register
