"""
Registration API routes
"""

from fastapi import APIRouter, Depends, status

from airdrop.core.exceptions import DuplicateRegistrationException
from airdrop.core.rate_limit import rate_limit, REGISTRATION, VERIFICATION, GENERAL
from airdrop.schemas import (
    RegistrationRequest,
    VerificationRequest,
    RegistrationOut,
    RegistrationResponse,
    StatsResponse,
)
from airdrop.services import RegistrationService, VerificationService
from airdrop.utils.dependencies import get_registration_service, get_verification_service

router = APIRouter()

@router.post(
    "/registration",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register for the airdrop",
    description="Create a registration for a wallet; a wallet or email can only register once",
    dependencies=[Depends(rate_limit(REGISTRATION))]
)
async def register(
    request: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service)
):
    result = await service.register(request)

    if not result.created:
        raise DuplicateRegistrationException(
            field=result.conflict_field,
            registration=RegistrationOut.model_validate(result.registration).model_dump(mode="json")
        )

    return RegistrationResponse(registration=RegistrationOut.model_validate(result.registration))

@router.get(
    "/registration/{wallet_address}",
    response_model=RegistrationResponse,
    summary="Get registration by wallet",
    dependencies=[Depends(rate_limit(GENERAL))]
)
async def get_registration(
    wallet_address: str,
    service: RegistrationService = Depends(get_registration_service)
):
    registration = await service.get(wallet_address)
    return RegistrationResponse(registration=RegistrationOut.model_validate(registration))

@router.put(
    "/registration/verify",
    response_model=RegistrationResponse,
    summary="Update social verification",
    description="Merge verification steps into the registration; steps never revert once completed",
    dependencies=[Depends(rate_limit(VERIFICATION))]
)
async def update_verification(
    request: VerificationRequest,
    service: VerificationService = Depends(get_verification_service)
):
    registration = await service.update_verification(request)
    return RegistrationResponse(registration=RegistrationOut.model_validate(registration))

@router.get(
    "/registration-stats",
    response_model=StatsResponse,
    summary="Registration statistics",
    dependencies=[Depends(rate_limit(GENERAL))]
)
async def get_registration_stats(
    service: RegistrationService = Depends(get_registration_service)
):
    stats = await service.stats()
    return StatsResponse(stats=stats)
