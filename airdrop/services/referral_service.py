"""Referral system service"""

from dataclasses import dataclass
from typing import Optional
import hashlib
import logging

from airdrop.core.exceptions import DatabaseException
from airdrop.models import Referral, ReferralEvent
from airdrop.repositories import AirdropStore, UniqueViolation

logger = logging.getLogger(__name__)

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))

def generate_code(wallet_address: str, length: int = 10, attempt: int = 0) -> str:
    """
    Deterministic shareable code for a wallet

    The same wallet and attempt always give the same code. A non-zero
    ``attempt`` salts the hash to step past a collision.
    """
    seed = wallet_address if attempt == 0 else f"{wallet_address}:{attempt}"
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    code = to_base36(int.from_bytes(digest, "big"))
    return code[:length]

@dataclass
class TrackResult:
    ok: bool
    reason: Optional[str] = None
    duplicate: bool = False
    total_referred: int = 0

class ReferralService:
    """Service for managing referral codes and referral events"""

    def __init__(self, store: AirdropStore, code_length: int = 10, max_attempts: int = 5):
        self.store = store
        self.code_length = code_length
        self.max_attempts = max_attempts

    async def get_or_create(self, wallet_address: str) -> Referral:
        """Return the wallet's referral record, creating it on first use"""
        existing = await self.store.get_referral_by_wallet(wallet_address)
        if existing:
            return existing

        for attempt in range(self.max_attempts):
            code = generate_code(wallet_address, self.code_length, attempt)
            try:
                referral = await self.store.insert_referral(Referral.new(wallet_address, code))
                logger.info(f"Created referral code {code}")
                return referral
            except UniqueViolation:
                # Either a concurrent request created it first, or the code
                # belongs to another wallet
                existing = await self.store.get_referral_by_wallet(wallet_address)
                if existing:
                    return existing
                logger.warning(f"Referral code collision on attempt {attempt}, regenerating")

        raise DatabaseException("Could not allocate a unique referral code")

    async def track_event(self, referral_code: str, referee_wallet_address: str) -> TrackResult:
        """Credit a referee to a referral code and refresh the referrer's total"""
        referral = await self.store.get_referral_by_code(referral_code)
        if not referral:
            return TrackResult(ok=False, reason="unknown_code")

        referrer = referral.referrer_wallet_address
        if referrer == referee_wallet_address:
            return TrackResult(ok=False, reason="self_referral")

        duplicate = False
        try:
            await self.store.insert_referral_event(
                ReferralEvent.new(referral.referral_code, referrer, referee_wallet_address)
            )
        except UniqueViolation:
            duplicate = True

        total = await self.store.count_referral_events(referrer)
        await self.store.set_total_referred(referrer, total)

        return TrackResult(ok=True, duplicate=duplicate, total_referred=total)
