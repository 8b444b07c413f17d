"""
Referral API routes
"""

from fastapi import APIRouter, Depends

from airdrop.core.exceptions import ReferralTrackingException
from airdrop.core.rate_limit import rate_limit, VERIFICATION, GENERAL
from airdrop.schemas import (
    TrackReferralRequest,
    ReferralInfo,
    ReferralInfoResponse,
    TrackReferralResponse,
)
from airdrop.services import ReferralService
from airdrop.utils.dependencies import get_referral_service, wallet_path_param

router = APIRouter()

@router.get(
    "/referral/{wallet}",
    response_model=ReferralInfoResponse,
    summary="Get or create the wallet's referral code",
    dependencies=[Depends(rate_limit(GENERAL))]
)
async def get_referral_info(
    wallet_address: str = Depends(wallet_path_param("wallet")),
    service: ReferralService = Depends(get_referral_service)
):
    referral = await service.get_or_create(wallet_address)
    return ReferralInfoResponse(info=ReferralInfo.model_validate(referral))

@router.post(
    "/referral/track",
    response_model=TrackReferralResponse,
    summary="Credit a referee wallet to a referral code",
    dependencies=[Depends(rate_limit(VERIFICATION))]
)
async def track_referral(
    request: TrackReferralRequest,
    service: ReferralService = Depends(get_referral_service)
):
    result = await service.track_event(request.referral_code, request.referee_wallet_address)
    if not result.ok:
        raise ReferralTrackingException(result.reason)

    return TrackReferralResponse(duplicate=result.duplicate, total_referred=result.total_referred)
