"""Referral schemas"""

from pydantic import BaseModel, ConfigDict, field_validator

from airdrop.utils.validators import validate_wallet_address, normalize_referral_code

class TrackReferralRequest(BaseModel):
    referral_code: str
    referee_wallet_address: str

    @field_validator('referral_code')
    @classmethod
    def validate_code(cls, v):
        return normalize_referral_code(v)

    @field_validator('referee_wallet_address')
    @classmethod
    def validate_wallet(cls, v):
        return validate_wallet_address(v)

class ReferralInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    referral_code: str
    total_referred: int

class ReferralInfoResponse(BaseModel):
    success: bool = True
    info: ReferralInfo

class TrackReferralResponse(BaseModel):
    success: bool = True
    duplicate: bool = False
    total_referred: int
