"""Airdrop registration service"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from airdrop.core.exceptions import DatabaseException, RegistrationNotFoundException
from airdrop.models import Registration
from airdrop.repositories import AirdropStore, UniqueViolation
from airdrop.schemas import RegistrationRequest
from .referral_service import ReferralService

logger = logging.getLogger(__name__)

@dataclass
class SideEffectOutcome:
    """Result of a best-effort follow-up to a primary operation"""
    name: str
    succeeded: bool
    error: Optional[str] = None

@dataclass
class RegistrationResult:
    registration: Registration
    created: bool
    conflict_field: Optional[str] = None
    side_effects: List[SideEffectOutcome] = field(default_factory=list)

class RegistrationService:
    """Service for creating and reading registrations"""

    def __init__(self, store: AirdropStore, referrals: ReferralService):
        self.store = store
        self.referrals = referrals

    async def register(self, request: RegistrationRequest) -> RegistrationResult:
        """
        Create a registration, or report the one it collides with

        The request is already normalized by its schema. Uniqueness is
        checked up front and again by the store at insert time; a lost
        race is reported as a conflict, not an error.
        """
        conflict = await self._find_conflict(request.wallet_address, request.email)
        if conflict:
            return conflict

        registration = Registration.new(
            email=request.email,
            wallet_address=request.wallet_address,
            twitter=request.twitter,
            telegram=request.telegram,
        )

        try:
            registration = await self.store.insert_registration(registration)
        except UniqueViolation:
            logger.info("Registration insert hit a unique constraint, re-reading")
            conflict = await self._find_conflict(request.wallet_address, request.email)
            if conflict:
                return conflict
            raise DatabaseException("Registration conflicted but no matching record was found")

        logger.info(f"Registration {registration.id} created")

        result = RegistrationResult(registration=registration, created=True)
        result.side_effects = await self._link_referrals(request)
        return result

    async def get(self, wallet_address: str) -> Registration:
        registration = await self.store.get_registration_by_wallet(wallet_address)
        if not registration:
            raise RegistrationNotFoundException()
        return registration

    async def stats(self) -> Dict[str, int]:
        return await self.store.registration_stats()

    async def _find_conflict(self, wallet_address: str, email: str) -> Optional[RegistrationResult]:
        existing = await self.store.get_registration_by_wallet(wallet_address)
        if existing:
            return RegistrationResult(existing, created=False, conflict_field="wallet_address")

        existing = await self.store.get_registration_by_email(email)
        if existing:
            return RegistrationResult(existing, created=False, conflict_field="email")

        return None

    async def _link_referrals(self, request: RegistrationRequest) -> List[SideEffectOutcome]:
        """Ensure the new wallet has a code and credit its referrer; never raises"""
        outcomes = []

        try:
            await self.referrals.get_or_create(request.wallet_address)
            outcomes.append(SideEffectOutcome("ensure_referral", True))
        except Exception as e:
            outcomes.append(SideEffectOutcome("ensure_referral", False, str(e)))

        if request.referred_by_code:
            try:
                tracked = await self.referrals.track_event(request.referred_by_code, request.wallet_address)
                outcomes.append(SideEffectOutcome("link_referral", tracked.ok, tracked.reason))
            except Exception as e:
                outcomes.append(SideEffectOutcome("link_referral", False, str(e)))

        for outcome in outcomes:
            if not outcome.succeeded:
                logger.warning(
                    f"Registration side effect '{outcome.name}' failed: {outcome.error}"
                )

        return outcomes
