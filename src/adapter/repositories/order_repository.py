"""SQLAlchemy implementation of OrderRepository

Lock-gated writes are single conditional UPDATE/DELETE statements whose
rowcount tells the caller whether it won.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.order_repository import OrderRepository
from src.domain.actor import Actor, ActorKind
from src.domain.order import Order, OrderItem, OrderDamagedItem, OrderStatus


class SqlAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository

    Features:
    - Conditional claim (compare-and-set on locked/status/version)
    - Reads bypass stale identity-map state (populate_existing)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)

        for item in items:
            item.order_id = order.id
            self.session.add(item)
        await self.session.flush()
        return order

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        stmt = (
            select(Order)
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_items(self, order_id: int) -> List[OrderItem]:
        stmt = (
            select(OrderItem)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_damaged_items(self, order_id: int) -> List[OrderDamagedItem]:
        stmt = (
            select(OrderDamagedItem)
            .where(OrderDamagedItem.order_id == order_id)
            .order_by(OrderDamagedItem.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_orders(
        self,
        placed_by_kind: Optional[ActorKind] = None,
        placed_by_id: Optional[int] = None,
        distributor_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        order_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        stmt = select(Order).execution_options(populate_existing=True)

        if placed_by_kind is not None:
            stmt = stmt.where(Order.placed_by_kind == placed_by_kind)
        if placed_by_id is not None:
            stmt = stmt.where(Order.placed_by_id == placed_by_id)
        if distributor_id is not None:
            stmt = stmt.where(Order.distributor_id == distributor_id)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        if order_date is not None:
            stmt = stmt.where(Order.order_date == order_date)

        stmt = stmt.order_by(Order.created_at.desc(), Order.id.desc())
        stmt = stmt.limit(limit).offset(offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_if_unlocked(
        self,
        order_id: int,
        expected_version: int,
        order_date: Optional[date],
        updated_by: Actor,
    ) -> bool:
        values = {
            "version": Order.version + 1,
            "updated_by_kind": updated_by.kind,
            "updated_by_id": updated_by.id,
            "updated_by_name": updated_by.name,
            "updated_at": datetime.utcnow(),
        }
        if order_date is not None:
            values["order_date"] = order_date

        stmt = (
            update(Order)
            .where(Order.id == order_id)
            .where(Order.locked == False)  # noqa: E712
            .where(Order.version == expected_version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def replace_items(self, order_id: int, items: List[OrderItem]) -> None:
        await self.session.execute(
            delete(OrderItem)
            .where(OrderItem.order_id == order_id)
            .execution_options(synchronize_session=False)
        )
        for item in items:
            item.order_id = order_id
            self.session.add(item)
        await self.session.flush()

    async def delete_if_unlocked(self, order_id: int) -> bool:
        result = await self.session.execute(
            delete(Order)
            .where(Order.id == order_id)
            .where(Order.locked == False)  # noqa: E712
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False

        await self.session.execute(
            delete(OrderItem)
            .where(OrderItem.order_id == order_id)
            .execution_options(synchronize_session=False)
        )
        return True

    async def claim_for_delivery(
        self,
        order_id: int,
        expected_version: int,
        damaged_items: List[OrderDamagedItem],
        total_damaged_cost: Decimal,
        final_bill_amount: Decimal,
        updated_by: Actor,
        delivered_at: datetime,
    ) -> bool:
        stmt = (
            update(Order)
            .where(Order.id == order_id)
            .where(Order.locked == False)  # noqa: E712
            .where(Order.status == OrderStatus.PENDING)
            .where(Order.version == expected_version)
            .values(
                status=OrderStatus.DELIVERED,
                locked=True,
                version=Order.version + 1,
                delivery_date=delivered_at,
                total_damaged_cost=total_damaged_cost,
                final_bill_amount=final_bill_amount,
                updated_by_kind=updated_by.kind,
                updated_by_id=updated_by.id,
                updated_by_name=updated_by.name,
                updated_at=delivered_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        for item in damaged_items:
            item.order_id = order_id
            self.session.add(item)
        await self.session.flush()
        return True
