"""
Persistence gateway contract
Services depend on this interface only; each method is one remote call
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from airdrop.models import Registration, Referral, ReferralEvent


class StoreError(Exception):
    """The data store rejected or failed an operation"""


class UniqueViolation(StoreError):
    """An insert collided with a unique constraint"""


class StoreUnavailable(StoreError):
    """The data store could not be reached"""


class AirdropStore(ABC):
    """Row-level access to registrations, referrals and referral events"""

    # Registrations

    @abstractmethod
    async def get_registration_by_wallet(self, wallet_address: str) -> Optional[Registration]:
        ...

    @abstractmethod
    async def get_registration_by_email(self, email: str) -> Optional[Registration]:
        ...

    @abstractmethod
    async def insert_registration(self, registration: Registration) -> Registration:
        """Persist a new registration; raises UniqueViolation on wallet/email collision"""

    @abstractmethod
    async def update_registration(
        self, wallet_address: str, merge: Callable[[Registration], Dict[str, Any]]
    ) -> Optional[Registration]:
        """
        Read-modify-write one registration as a single step

        ``merge`` is called with the current row and returns the column
        values to change; an empty result skips the write. Returns None if
        the wallet is not registered.
        """

    @abstractmethod
    async def registration_stats(self) -> Dict[str, int]:
        """Counts of total, social_verified, is_verm_holder and bonus_eligible rows"""

    # Referrals

    @abstractmethod
    async def get_referral_by_wallet(self, wallet_address: str) -> Optional[Referral]:
        ...

    @abstractmethod
    async def get_referral_by_code(self, referral_code: str) -> Optional[Referral]:
        ...

    @abstractmethod
    async def insert_referral(self, referral: Referral) -> Referral:
        """Persist a referral record; raises UniqueViolation on wallet/code collision"""

    @abstractmethod
    async def set_total_referred(self, wallet_address: str, total: int) -> None:
        ...

    # Referral events

    @abstractmethod
    async def insert_referral_event(self, event: ReferralEvent) -> ReferralEvent:
        """Persist a referral event; raises UniqueViolation if the referee was already credited"""

    @abstractmethod
    async def count_referral_events(self, referrer_wallet_address: str) -> int:
        ...

    async def close(self) -> None:
        """Release any held resources"""
