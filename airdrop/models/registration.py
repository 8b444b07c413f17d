"""
Registration model
One row per airdrop participant, keyed by wallet address
"""

from sqlalchemy import Column, String, Boolean, Integer, Float, DateTime

from .base import BaseModel, utcnow

# Flags a verification update may set; everything else is server-owned
VERIFICATION_FLAGS = ("twitter_followed", "telegram_joined", "tweet_verified")


class Registration(BaseModel):
    """Airdrop registration with social verification state"""

    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Contact fields (normalized before insert)
    email = Column(String(255), unique=True, nullable=False, index=True)
    twitter = Column(String(32))
    telegram = Column(String(32))
    wallet_address = Column(String(44), unique=True, nullable=False, index=True)

    # Token holder state, populated by an external chain check
    is_verm_holder = Column(Boolean, default=False, nullable=False)
    verm_balance = Column(Float, default=0, nullable=False)

    # Verification steps
    twitter_followed = Column(Boolean, default=False, nullable=False)
    telegram_joined = Column(Boolean, default=False, nullable=False)
    tweet_verified = Column(Boolean, default=False, nullable=False)
    tweet_url = Column(String(500))
    friends_invited = Column(Integer, default=0, nullable=False)

    # Derived flags, never written by clients
    social_verified = Column(Boolean, default=False, nullable=False, index=True)
    bonus_eligible = Column(Boolean, default=False, nullable=False, index=True)

    @classmethod
    def new(cls, email: str, wallet_address: str, twitter: str = None, telegram: str = None) -> "Registration":
        """Build a fresh registration with every flag at its default"""
        return cls(
            timestamp=utcnow(),
            email=email,
            twitter=twitter,
            telegram=telegram,
            wallet_address=wallet_address,
            is_verm_holder=False,
            verm_balance=0,
            twitter_followed=False,
            telegram_joined=False,
            tweet_verified=False,
            tweet_url=None,
            friends_invited=0,
            social_verified=False,
            bonus_eligible=False,
        )
