"""Social verification service"""

from typing import Any, Dict
import logging

from airdrop.core.exceptions import RegistrationNotFoundException
from airdrop.models import Registration, VERIFICATION_FLAGS
from airdrop.repositories import AirdropStore
from airdrop.schemas import VerificationRequest

logger = logging.getLogger(__name__)

def is_socially_verified(values: Dict[str, Any]) -> bool:
    return bool(
        values["twitter_followed"]
        and values["telegram_joined"]
        and values["tweet_verified"]
        and values["friends_invited"] >= 1
    )

def merge_verification(registration: Registration, update: VerificationRequest) -> Dict[str, Any]:
    """
    Merge an update onto stored verification state

    Flags only move forward: a stored true is kept whatever the update
    says, and friends_invited keeps the larger value. Absent fields leave
    state untouched, so applying the same update twice or disjoint updates
    in either order ends in the same record. Returns only the columns
    whose value changes.
    """
    current = {
        "twitter_followed": bool(registration.twitter_followed),
        "telegram_joined": bool(registration.telegram_joined),
        "tweet_verified": bool(registration.tweet_verified),
        "friends_invited": registration.friends_invited or 0,
        "tweet_url": registration.tweet_url,
    }
    merged = dict(current)

    for flag in VERIFICATION_FLAGS:
        supplied = getattr(update, flag)
        if supplied is not None:
            merged[flag] = current[flag] or supplied

    if update.friends_invited is not None:
        merged["friends_invited"] = max(current["friends_invited"], update.friends_invited)

    if update.tweet_url is not None:
        merged["tweet_url"] = update.tweet_url

    merged["social_verified"] = bool(registration.social_verified) or is_socially_verified(merged)
    merged["bonus_eligible"] = merged["social_verified"] and bool(registration.is_verm_holder)

    current["social_verified"] = bool(registration.social_verified)
    current["bonus_eligible"] = bool(registration.bonus_eligible)

    return {key: value for key, value in merged.items() if current[key] != value}

class VerificationService:
    """Service applying partial verification updates"""

    def __init__(self, store: AirdropStore):
        self.store = store

    async def update_verification(self, update: VerificationRequest) -> Registration:
        changes: Dict[str, Any] = {}

        def merge(registration: Registration) -> Dict[str, Any]:
            # Derived flags come from the row being written, not an earlier read
            changes.update(merge_verification(registration, update))
            return changes

        updated = await self.store.update_registration(update.wallet_address, merge)
        if not updated:
            raise RegistrationNotFoundException()

        if changes.get("social_verified"):
            logger.info(f"Registration {updated.id} is now socially verified")

        return updated
