"""Request and response schemas"""

from .registration import (
    RegistrationRequest,
    VerificationRequest,
    RegistrationOut,
    RegistrationResponse,
    RegistrationStats,
    StatsResponse,
)
from .referral import (
    TrackReferralRequest,
    ReferralInfo,
    ReferralInfoResponse,
    TrackReferralResponse,
)
