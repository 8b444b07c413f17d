"""Referral system models"""

from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint

from .base import BaseModel, TimestampedModel, utcnow


class Referral(BaseModel, TimestampedModel):
    """Shareable referral code owned by a wallet"""

    __tablename__ = "referrals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    referrer_wallet_address = Column(String(44), unique=True, nullable=False, index=True)
    referral_code = Column(String(64), unique=True, nullable=False, index=True)
    total_referred = Column(Integer, default=0, nullable=False)

    @classmethod
    def new(cls, wallet_address: str, code: str) -> "Referral":
        return cls(
            referrer_wallet_address=wallet_address,
            referral_code=code,
            total_referred=0,
            created_at=utcnow(),
        )


class ReferralEvent(BaseModel, TimestampedModel):
    """A referee wallet credited to a referral code, at most once"""

    __tablename__ = "referral_events"
    __table_args__ = (
        UniqueConstraint("referral_code", "referee_wallet_address", name="uq_referral_event_referee"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    referral_code = Column(String(64), ForeignKey("referrals.referral_code"), nullable=False, index=True)
    referrer_wallet_address = Column(String(44), nullable=False, index=True)
    referee_wallet_address = Column(String(44), nullable=False)

    @classmethod
    def new(cls, referral_code: str, referrer_wallet_address: str, referee_wallet_address: str) -> "ReferralEvent":
        return cls(
            referral_code=referral_code,
            referrer_wallet_address=referrer_wallet_address,
            referee_wallet_address=referee_wallet_address,
            created_at=utcnow(),
        )
