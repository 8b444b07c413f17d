"""
Common dependencies for FastAPI
"""

from fastapi import Depends, Request

from airdrop.core.exceptions import ValidationException
from airdrop.repositories import AirdropStore
from airdrop.services import ReferralService, RegistrationService, VerificationService
from .validators import validate_wallet_address

def get_store(request: Request) -> AirdropStore:
    """Persistence gateway attached to the running application"""
    return request.app.state.store

def get_referral_service(
    request: Request,
    store: AirdropStore = Depends(get_store)
) -> ReferralService:
    settings = request.app.state.settings
    return ReferralService(
        store,
        code_length=settings.REFERRAL_CODE_LENGTH,
        max_attempts=settings.REFERRAL_CODE_MAX_ATTEMPTS,
    )

def get_registration_service(
    store: AirdropStore = Depends(get_store),
    referrals: ReferralService = Depends(get_referral_service)
) -> RegistrationService:
    return RegistrationService(store, referrals)

def get_verification_service(store: AirdropStore = Depends(get_store)) -> VerificationService:
    return VerificationService(store)

def wallet_path_param(name: str):
    """Path parameter dependency validating a base58 wallet address"""
    async def dependency(request: Request) -> str:
        value = request.path_params.get(name, "")
        try:
            return validate_wallet_address(value)
        except ValueError as e:
            raise ValidationException(
                detail="Invalid wallet address",
                details=[{"field": name, "message": str(e), "code": "invalid_wallet_address"}]
            )

    return dependency
