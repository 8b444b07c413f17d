"""SQLAlchemy implementation of the persistence gateway"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, Optional
import logging

from sqlalchemy import select, update, func, case
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from airdrop.core.database import build_session_factory, init_db, close_db
from airdrop.models import Registration, Referral, ReferralEvent
from .base import AirdropStore, StoreError, StoreUnavailable, UniqueViolation

logger = logging.getLogger(__name__)


class SQLAlchemyStore(AirdropStore):
    """
    Gateway backed by a relational database

    Every method runs in its own short-lived session so no transaction
    spans more than one call. Driver errors are translated into the
    gateway's StoreError family.
    """

    def __init__(self, engine: AsyncEngine, session_factory: Optional[async_sessionmaker] = None):
        self.engine = engine
        self.session_factory = session_factory or build_session_factory(engine)

    async def create_all(self) -> None:
        await init_db(self.engine)

    async def close(self) -> None:
        await close_db(self.engine)

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.session_factory() as session:
                yield session
        except IntegrityError as e:
            raise UniqueViolation(str(e.orig)) from e
        except (OperationalError, InterfaceError, OSError) as e:
            logger.error(f"Database unreachable: {e}")
            raise StoreUnavailable("Database unreachable") from e
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    # Registrations

    async def get_registration_by_wallet(self, wallet_address: str) -> Optional[Registration]:
        async with self._session() as session:
            result = await session.execute(
                select(Registration).where(Registration.wallet_address == wallet_address)
            )
            return result.scalar_one_or_none()

    async def get_registration_by_email(self, email: str) -> Optional[Registration]:
        async with self._session() as session:
            result = await session.execute(
                select(Registration).where(Registration.email == email)
            )
            return result.scalar_one_or_none()

    async def insert_registration(self, registration: Registration) -> Registration:
        async with self._session() as session:
            session.add(registration)
            await session.commit()
            return registration

    async def update_registration(
        self, wallet_address: str, merge: Callable[[Registration], Dict[str, Any]]
    ) -> Optional[Registration]:
        async with self._session() as session:
            # Row lock holds concurrent merges off until this one commits
            result = await session.execute(
                select(Registration)
                .where(Registration.wallet_address == wallet_address)
                .with_for_update()
            )
            registration = result.scalar_one_or_none()
            if registration is None:
                return None

            values = merge(registration)
            if not values:
                return registration

            for key, value in values.items():
                setattr(registration, key, value)

            await session.commit()
            return registration

    async def registration_stats(self) -> Dict[str, int]:
        def count_true(column):
            return func.coalesce(func.sum(case((column.is_(True), 1), else_=0)), 0)

        async with self._session() as session:
            result = await session.execute(
                select(
                    func.count(Registration.id),
                    count_true(Registration.social_verified),
                    count_true(Registration.is_verm_holder),
                    count_true(Registration.bonus_eligible),
                )
            )
            total, verified, holders, eligible = result.one()

        return {
            "total_registrations": int(total or 0),
            "verified_users": int(verified or 0),
            "verm_holders": int(holders or 0),
            "bonus_eligible": int(eligible or 0),
        }

    # Referrals

    async def get_referral_by_wallet(self, wallet_address: str) -> Optional[Referral]:
        async with self._session() as session:
            result = await session.execute(
                select(Referral).where(Referral.referrer_wallet_address == wallet_address)
            )
            return result.scalar_one_or_none()

    async def get_referral_by_code(self, referral_code: str) -> Optional[Referral]:
        async with self._session() as session:
            result = await session.execute(
                select(Referral).where(Referral.referral_code == referral_code)
            )
            return result.scalar_one_or_none()

    async def insert_referral(self, referral: Referral) -> Referral:
        async with self._session() as session:
            session.add(referral)
            await session.commit()
            return referral

    async def set_total_referred(self, wallet_address: str, total: int) -> None:
        async with self._session() as session:
            await session.execute(
                update(Referral)
                .where(Referral.referrer_wallet_address == wallet_address)
                .values(total_referred=total)
            )
            await session.commit()

    # Referral events

    async def insert_referral_event(self, event: ReferralEvent) -> ReferralEvent:
        async with self._session() as session:
            session.add(event)
            await session.commit()
            return event

    async def count_referral_events(self, referrer_wallet_address: str) -> int:
        async with self._session() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(ReferralEvent)
                .where(ReferralEvent.referrer_wallet_address == referrer_wallet_address)
            )
            return int(count or 0)
