"""In-process implementation of the persistence gateway"""

import asyncio
from itertools import count
from typing import Any, Callable, Dict, List, Optional

from airdrop.models import Registration, Referral, ReferralEvent
from .base import AirdropStore, UniqueViolation


class InMemoryStore(AirdropStore):
    """
    Gateway that keeps rows in process memory

    Enforces the same unique constraints as the SQL schema. Each call
    yields to the event loop before touching state, so interleavings
    between concurrent requests behave like remote calls.
    """

    def __init__(self):
        self.registrations: List[Registration] = []
        self.referrals: List[Referral] = []
        self.referral_events: List[ReferralEvent] = []
        self._registration_ids = count(1)
        self._referral_ids = count(1)
        self._event_ids = count(1)

    async def _suspend(self) -> None:
        await asyncio.sleep(0)

    # Registrations

    async def get_registration_by_wallet(self, wallet_address: str) -> Optional[Registration]:
        await self._suspend()
        return next((r for r in self.registrations if r.wallet_address == wallet_address), None)

    async def get_registration_by_email(self, email: str) -> Optional[Registration]:
        await self._suspend()
        return next((r for r in self.registrations if r.email == email), None)

    async def insert_registration(self, registration: Registration) -> Registration:
        await self._suspend()
        for existing in self.registrations:
            if existing.wallet_address == registration.wallet_address:
                raise UniqueViolation("duplicate key value violates unique constraint on wallet_address")
            if existing.email == registration.email:
                raise UniqueViolation("duplicate key value violates unique constraint on email")

        registration.id = next(self._registration_ids)
        self.registrations.append(registration)
        return registration

    async def update_registration(
        self, wallet_address: str, merge: Callable[[Registration], Dict[str, Any]]
    ) -> Optional[Registration]:
        await self._suspend()
        # No await between read and write
        registration = next((r for r in self.registrations if r.wallet_address == wallet_address), None)
        if registration is None:
            return None
        for key, value in merge(registration).items():
            setattr(registration, key, value)
        return registration

    async def registration_stats(self) -> Dict[str, int]:
        await self._suspend()
        rows = self.registrations
        return {
            "total_registrations": len(rows),
            "verified_users": sum(1 for r in rows if r.social_verified),
            "verm_holders": sum(1 for r in rows if r.is_verm_holder),
            "bonus_eligible": sum(1 for r in rows if r.bonus_eligible),
        }

    # Referrals

    async def get_referral_by_wallet(self, wallet_address: str) -> Optional[Referral]:
        await self._suspend()
        return next((r for r in self.referrals if r.referrer_wallet_address == wallet_address), None)

    async def get_referral_by_code(self, referral_code: str) -> Optional[Referral]:
        await self._suspend()
        return next((r for r in self.referrals if r.referral_code == referral_code), None)

    async def insert_referral(self, referral: Referral) -> Referral:
        await self._suspend()
        for existing in self.referrals:
            if existing.referrer_wallet_address == referral.referrer_wallet_address:
                raise UniqueViolation("duplicate key value violates unique constraint on referrer_wallet_address")
            if existing.referral_code == referral.referral_code:
                raise UniqueViolation("duplicate key value violates unique constraint on referral_code")

        referral.id = next(self._referral_ids)
        self.referrals.append(referral)
        return referral

    async def set_total_referred(self, wallet_address: str, total: int) -> None:
        referral = await self.get_referral_by_wallet(wallet_address)
        if referral is not None:
            referral.total_referred = total

    # Referral events

    async def insert_referral_event(self, event: ReferralEvent) -> ReferralEvent:
        await self._suspend()
        for existing in self.referral_events:
            if (
                existing.referral_code == event.referral_code
                and existing.referee_wallet_address == event.referee_wallet_address
            ):
                raise UniqueViolation("duplicate key value violates unique constraint uq_referral_event_referee")

        event.id = next(self._event_ids)
        self.referral_events.append(event)
        return event

    async def count_referral_events(self, referrer_wallet_address: str) -> int:
        await self._suspend()
        return sum(1 for e in self.referral_events if e.referrer_wallet_address == referrer_wallet_address)
