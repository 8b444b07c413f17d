"""Database models"""

from .base import Base, BaseModel, TimestampedModel
from .registration import Registration, VERIFICATION_FLAGS
from .referral import Referral, ReferralEvent

__all__ = [
    "Base",
    "BaseModel",
    "TimestampedModel",
    "Registration",
    "VERIFICATION_FLAGS",
    "Referral",
    "ReferralEvent",
]
