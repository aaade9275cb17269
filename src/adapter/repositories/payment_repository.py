"""SQLAlchemy implementation of PaymentRepository"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def list_payments(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Payment]:
        stmt = select(Payment)

        if distributor_id is not None:
            stmt = stmt.where(Payment.distributor_id == distributor_id)

        stmt = stmt.order_by(Payment.created_at.desc(), Payment.id.desc())
        stmt = stmt.limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
