"""Business services"""

from .referral_service import ReferralService, TrackResult, generate_code
from .registration_service import RegistrationService, RegistrationResult, SideEffectOutcome
from .verification_service import VerificationService, merge_verification

__all__ = [
    "ReferralService",
    "TrackResult",
    "generate_code",
    "RegistrationService",
    "RegistrationResult",
    "SideEffectOutcome",
    "VerificationService",
    "merge_verification",
]
