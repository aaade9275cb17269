"""SQLAlchemy implementation of DistributorRepository

Wallet mutations are single UPDATE statements computed by the database
(``wallet_balance = wallet_balance + :amount``), so concurrent credits for
the same distributor never lose an update.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.distributor_repository import DistributorRepository
from src.domain.distributor import Distributor


class SqlAlchemyDistributorRepository(DistributorRepository):
    """
    SQLAlchemy implementation of DistributorRepository

    Features:
    - Atomic balance increments/decrements at the storage layer
    - Conditional decrement (balance >= amount) for debits
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, distributor: Distributor) -> Distributor:
        self.session.add(distributor)
        await self.session.flush()
        await self.session.refresh(distributor)
        return distributor

    async def get_by_id(self, distributor_id: int) -> Optional[Distributor]:
        stmt = (
            select(Distributor)
            .where(Distributor.id == distributor_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[Distributor]:
        stmt = select(Distributor).where(Distributor.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_distributors(self, limit: int = 50, offset: int = 0) -> List[Distributor]:
        stmt = (
            select(Distributor)
            .order_by(Distributor.id)
            .limit(limit)
            .offset(offset)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def increment_balance(self, distributor_id: int, amount: Decimal) -> Optional[Decimal]:
        stmt = (
            update(Distributor)
            .where(Distributor.id == distributor_id)
            .values(
                wallet_balance=Distributor.wallet_balance + amount,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self._read_balance(distributor_id)

    async def decrement_balance_if_sufficient(
        self, distributor_id: int, amount: Decimal
    ) -> Optional[Decimal]:
        stmt = (
            update(Distributor)
            .where(Distributor.id == distributor_id)
            .where(Distributor.wallet_balance >= amount)
            .values(
                wallet_balance=Distributor.wallet_balance - amount,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self._read_balance(distributor_id)

    async def _read_balance(self, distributor_id: int) -> Decimal:
        stmt = select(Distributor.wallet_balance).where(Distributor.id == distributor_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
