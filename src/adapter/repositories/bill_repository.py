"""SQLAlchemy Bill Repository Implementation

Implements bill persistence using SQLAlchemy async session. Writes to an
existing bill are conditional on it being unlocked.
"""

import random
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import delete, update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.bill_repository import BillRepository
from src.domain.bill import Bill, BillLine


class BillNumberExhausted(RuntimeError):
    """No unused bill number was found within the configured attempts"""


class SqlAlchemyBillRepository(BillRepository):
    """
    SQLAlchemy implementation of BillRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession, prefix: str = "BILL", max_attempts: int = 20):
        self.session = session
        self.prefix = prefix
        self.max_attempts = max_attempts

    async def create(self, bill: Bill) -> Bill:
        self.session.add(bill)
        await self.session.flush()
        await self.session.refresh(bill)
        return bill

    async def get_by_id(self, bill_id: int) -> Optional[Bill]:
        statement = (
            select(Bill)
            .where(Bill.id == bill_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_order_id(self, order_id: int) -> Optional[Bill]:
        statement = (
            select(Bill)
            .where(Bill.order_id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_lines(self, bill_id: int) -> List[BillLine]:
        statement = (
            select(BillLine)
            .where(BillLine.bill_id == bill_id)
            .order_by(BillLine.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update_if_unlocked(self, bill_id: int, values: Dict[str, Any]) -> Optional[Bill]:
        stmt = (
            update(Bill)
            .where(Bill.id == bill_id)
            .where(Bill.locked == False)  # noqa: E712
            .values(**values, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self.get_by_id(bill_id)

    async def replace_lines(self, bill_id: int, lines: List[BillLine]) -> None:
        await self.session.execute(
            delete(BillLine)
            .where(BillLine.bill_id == bill_id)
            .execution_options(synchronize_session=False)
        )
        for line in lines:
            line.bill_id = bill_id
            self.session.add(line)
        await self.session.flush()

    async def delete_unlocked_for_order(self, order_id: int) -> bool:
        unlocked_bill_ids = (
            select(Bill.id)
            .where(Bill.order_id == order_id)
            .where(Bill.locked == False)  # noqa: E712
        )
        await self.session.execute(
            delete(BillLine)
            .where(BillLine.bill_id.in_(unlocked_bill_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Bill)
            .where(Bill.order_id == order_id)
            .where(Bill.locked == False)  # noqa: E712
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def list_bills(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Bill]:
        statement = select(Bill)

        if distributor_id is not None:
            statement = statement.where(Bill.distributor_id == distributor_id)

        statement = statement.order_by(Bill.created_at.desc(), Bill.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def generate_bill_number(self) -> str:
        """
        Generate an unused bill number

        Format: BILL-YYYYMMDD-NNNN with a random 4-digit disambiguator,
        retried until no existing bill carries it.

        Raises:
            BillNumberExhausted: every attempt collided
        """
        stamp = datetime.utcnow().strftime("%Y%m%d")

        for _ in range(self.max_attempts):
            candidate = f"{self.prefix}-{stamp}-{random.randint(0, 9999):04d}"
            statement = (
                select(func.count())
                .select_from(Bill)
                .where(Bill.bill_number == candidate)
            )
            result = await self.session.execute(statement)
            if result.scalar_one() == 0:
                return candidate

        raise BillNumberExhausted(
            f"No free bill number for {stamp} after {self.max_attempts} attempts"
        )
