"""
Tests for referral code generation, get-or-create and event tracking.
"""

from __future__ import annotations

import asyncio

import pytest

from airdrop.core.exceptions import DatabaseException
from airdrop.models import Referral
from airdrop.repositories import InMemoryStore
from airdrop.services import ReferralService, generate_code

from conftest import WALLET_A, WALLET_B, WALLET_C


def test_generate_code_is_deterministic():
    assert generate_code(WALLET_A) == generate_code(WALLET_A)
    assert generate_code(WALLET_A) != generate_code(WALLET_B)
    assert generate_code(WALLET_A, attempt=1) != generate_code(WALLET_A)


def test_generate_code_shape():
    code = generate_code(WALLET_A, length=10)
    assert len(code) == 10
    assert code.isalnum()
    assert code == code.lower()


async def test_get_or_create_returns_same_code(store):
    service = ReferralService(store)

    first = await service.get_or_create(WALLET_A)
    second = await service.get_or_create(WALLET_A)

    assert first.referral_code == second.referral_code == generate_code(WALLET_A)
    assert first.total_referred == 0
    assert len(store.referrals) == 1


async def test_concurrent_get_or_create_creates_one_record(store):
    service = ReferralService(store)

    results = await asyncio.gather(*(service.get_or_create(WALLET_A) for _ in range(3)))

    assert {r.referral_code for r in results} == {generate_code(WALLET_A)}
    assert len(store.referrals) == 1


async def test_code_collision_regenerates(store):
    # Another wallet already owns this wallet's first-choice code
    await store.insert_referral(Referral.new(WALLET_B, generate_code(WALLET_A)))
    service = ReferralService(store)

    referral = await service.get_or_create(WALLET_A)

    assert referral.referral_code == generate_code(WALLET_A, attempt=1)
    assert referral.referrer_wallet_address == WALLET_A


async def test_code_collisions_exhaust_attempts(store):
    for attempt in range(2):
        await store.insert_referral(
            Referral.new(f"{WALLET_B[:-1]}{attempt + 1}", generate_code(WALLET_A, attempt=attempt))
        )
    service = ReferralService(store, max_attempts=2)

    with pytest.raises(DatabaseException):
        await service.get_or_create(WALLET_A)


async def test_track_event_counts_once_per_referee(store):
    service = ReferralService(store)
    referral = await service.get_or_create(WALLET_A)

    first = await service.track_event(referral.referral_code, WALLET_B)
    second = await service.track_event(referral.referral_code, WALLET_B)

    assert first.ok and not first.duplicate
    assert second.ok and second.duplicate
    assert second.total_referred == 1
    assert (await store.get_referral_by_wallet(WALLET_A)).total_referred == 1
    assert len(store.referral_events) == 1


async def test_track_event_counts_distinct_referees(store):
    service = ReferralService(store)
    referral = await service.get_or_create(WALLET_A)

    await service.track_event(referral.referral_code, WALLET_B)
    result = await service.track_event(referral.referral_code, WALLET_C)

    assert result.total_referred == 2


async def test_track_event_unknown_code(store):
    result = await ReferralService(store).track_event("doesnotexist", WALLET_B)
    assert result.ok is False
    assert result.reason == "unknown_code"
    assert store.referral_events == []


async def test_track_event_rejects_self_referral(store):
    service = ReferralService(store)
    referral = await service.get_or_create(WALLET_A)

    result = await service.track_event(referral.referral_code, WALLET_A)
    assert result.ok is False
    assert result.reason == "self_referral"


async def test_track_event_repairs_stale_counter():
    """A counter left behind by an interrupted call converges on retry."""
    store = InMemoryStore()
    service = ReferralService(store)
    referral = await service.get_or_create(WALLET_A)
    await service.track_event(referral.referral_code, WALLET_B)
    await store.set_total_referred(WALLET_A, 0)

    result = await service.track_event(referral.referral_code, WALLET_B)
    assert result.total_referred == 1
    assert (await store.get_referral_by_wallet(WALLET_A)).total_referred == 1


def test_get_referral_info_creates_on_first_call(client):
    r = client.get(f"/api/referral/{WALLET_A}")
    assert r.status_code == 200
    assert r.json() == {
        "success": True,
        "info": {"referral_code": generate_code(WALLET_A), "total_referred": 0},
    }


def test_get_referral_info_rejects_invalid_wallet(client):
    r = client.get("/api/referral/0OIl-invalid")
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Invalid wallet address"


def test_track_referral_route(client):
    code = client.get(f"/api/referral/{WALLET_A}").json()["info"]["referral_code"]
    payload = {"referral_code": code, "referee_wallet_address": WALLET_B}

    r1 = client.post("/api/referral/track", json=payload)
    r2 = client.post("/api/referral/track", json=payload)

    assert r1.status_code == 200
    assert r1.json() == {"success": True, "duplicate": False, "total_referred": 1}
    assert r2.json() == {"success": True, "duplicate": True, "total_referred": 1}
    assert client.get(f"/api/referral/{WALLET_A}").json()["info"]["total_referred"] == 1


def test_track_referral_unknown_code_is_400(client):
    r = client.post("/api/referral/track", json={
        "referral_code": "nosuchcode",
        "referee_wallet_address": WALLET_B,
    })
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Failed to track referral"


def test_track_referral_validation(client):
    r = client.post("/api/referral/track", json={"referral_code": "ab", "referee_wallet_address": "short"})
    assert r.status_code == 400
    fields = {d["field"] for d in r.json()["details"]}
    assert fields == {"referral_code", "referee_wallet_address"}
