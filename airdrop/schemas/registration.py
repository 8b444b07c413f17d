"""
Registration schemas for request/response validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from airdrop.utils.validators import (
    validate_email_address,
    validate_wallet_address,
    normalize_handle,
    normalize_referral_code,
    validate_tweet_url,
)

EXAMPLE_WALLET = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"

class RegistrationRequest(BaseModel):
    """New airdrop registration"""
    email: str = Field(..., max_length=255, examples=["holder@mail.com"])
    twitter: Optional[str] = Field(None, examples=["@verm_fan"])
    telegram: Optional[str] = Field(None, examples=["verm_fan"])
    wallet_address: str = Field(..., examples=[EXAMPLE_WALLET])
    referred_by_code: Optional[str] = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        return validate_email_address(v)

    @field_validator('twitter', 'telegram')
    @classmethod
    def validate_handle(cls, v):
        return normalize_handle(v)

    @field_validator('wallet_address')
    @classmethod
    def validate_wallet(cls, v):
        return validate_wallet_address(v)

    @field_validator('referred_by_code')
    @classmethod
    def validate_referral_code(cls, v):
        if v is None or not v.strip():
            return None
        return normalize_referral_code(v)

class VerificationRequest(BaseModel):
    """Partial update of social verification steps"""
    wallet_address: str
    twitter_followed: Optional[bool] = None
    telegram_joined: Optional[bool] = None
    tweet_verified: Optional[bool] = None
    tweet_url: Optional[str] = None
    friends_invited: Optional[int] = Field(None, ge=0, le=10)

    @field_validator('wallet_address')
    @classmethod
    def validate_wallet(cls, v):
        return validate_wallet_address(v)

    @field_validator('tweet_url')
    @classmethod
    def validate_url(cls, v):
        if v is None:
            return v
        return validate_tweet_url(v)

    model_config = {
        "json_schema_extra": {
            "example": {
                "wallet_address": EXAMPLE_WALLET,
                "twitter_followed": True,
                "friends_invited": 1
            }
        }
    }

class RegistrationOut(BaseModel):
    """Registration as returned to clients"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    timestamp: datetime
    email: str
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    wallet_address: str
    is_verm_holder: bool
    verm_balance: float
    bonus_eligible: bool
    social_verified: bool
    twitter_followed: bool
    telegram_joined: bool
    tweet_verified: bool
    tweet_url: Optional[str] = None
    friends_invited: int

class RegistrationResponse(BaseModel):
    success: bool = True
    registration: RegistrationOut

class RegistrationStats(BaseModel):
    total_registrations: int
    verified_users: int
    verm_holders: int
    bonus_eligible: int

class StatsResponse(BaseModel):
    success: bool = True
    stats: RegistrationStats
