"""Integration tests for the settlement flow on a real database

Tests cover:
- Bill, order and wallet written together
- Second settlement rejected, wallet credited once
- Conservation across sequential and concurrent settlements
- Racing settlements of the same order
- Bill preview racing a settlement
- Lock gate on edit/delete after settlement
"""

import asyncio
from datetime import datetime
from decimal import Decimal
import pytest

from src.adapter.repositories import (
    SqlAlchemyBillRepository,
    SqlAlchemyDistributorRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing import UpsertBill
from src.app.use_cases.billing.dtos import DamagedDeclarationDTO, UpsertBillCommandDTO
from src.app.use_cases.orders import (
    CreateOrder,
    DeleteOrder,
    SettleDelivery,
    UpdateOrder,
)
from src.app.use_cases.orders.dtos import (
    CreateOrderCommandDTO,
    DeleteOrderCommandDTO,
    OrderItemDTO,
    SettleDeliveryCommandDTO,
    UpdateOrderCommandDTO,
)
from src.domain.actor import Actor, ActorKind
from src.domain.bill import BillLineType, BillStatus
from src.domain.order import OrderStatus

STAFF = Actor(kind=ActorKind.STAFF, id=7, name="Anil")


def settle_use_case(session):
    return SettleDelivery(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDistributorRepository(session),
    )


async def place_order(session, seed, items):
    use_case = CreateOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDistributorRepository(session),
    )
    result = await use_case.execute(
        CreateOrderCommandDTO(
            distributor_id=seed["distributor_id"],
            order_date=seed["tomorrow"],
            items=[
                OrderItemDTO(product_id=pid, quantity=Decimal(str(qty)), unit="tub")
                for pid, qty in items
            ],
            actor=STAFF,
        )
    )
    assert result.is_ok(), result.error
    return result.value.order_id


async def wallet_balance(session, distributor_id):
    distributor = await SqlAlchemyDistributorRepository(session).get_by_id(distributor_id)
    return distributor.wallet_balance


class TestSettlementFlow:

    @pytest.mark.asyncio
    async def test_settlement_writes_bill_order_and_wallet(self, db_session, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])

        result = await settle_use_case(db_session).execute(
            SettleDeliveryCommandDTO(
                order_id=order_id,
                damaged_products=[
                    DamagedDeclarationDTO(product_id=seed["packet_product_id"], damaged_quantity=1)
                ],
                actor=STAFF,
            )
        )

        assert result.is_ok(), result.error
        assert result.value.final_bill_amount == Decimal("180.00")
        assert result.value.wallet_balance == Decimal("180.00")
        # draft bill from order placement is reused
        assert result.value.bill_generated is False

        order = await SqlAlchemyOrderRepository(db_session).get_by_id(order_id)
        assert order.status == OrderStatus.DELIVERED
        assert order.locked is True
        assert order.version == 2
        assert order.final_bill_amount == Decimal("180.00")
        assert order.total_damaged_cost == Decimal("20.00")
        damaged = await SqlAlchemyOrderRepository(db_session).get_damaged_items(order_id)
        assert [(d.product_id, d.quantity) for d in damaged] == [(seed["packet_product_id"], 1)]

        bill_repo = SqlAlchemyBillRepository(db_session)
        bill = await bill_repo.get_by_order_id(order_id)
        assert bill.locked is True
        assert bill.status == BillStatus.COMPLETED
        assert bill.total_amount == Decimal("180.00")
        assert bill.bill_number.startswith("BILL-")
        lines = await bill_repo.get_lines(bill.id)
        assert sorted(line.line_type for line in lines) == [BillLineType.DAMAGED, BillLineType.ITEM]

        assert await wallet_balance(db_session, seed["distributor_id"]) == Decimal("180.00")

    @pytest.mark.asyncio
    async def test_second_settlement_is_rejected(self, db_session, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])
        command = SettleDeliveryCommandDTO(order_id=order_id, actor=STAFF)

        first = await settle_use_case(db_session).execute(command)
        second = await settle_use_case(db_session).execute(command)

        assert first.is_ok()
        assert second.is_err()
        assert second.error.code == "ALREADY_SETTLED"
        assert await wallet_balance(db_session, seed["distributor_id"]) == Decimal("200.00")

    @pytest.mark.asyncio
    async def test_wallet_equals_sum_of_settlements(self, db_session, seed):
        orders = [
            await place_order(db_session, seed, [(seed["tub_product_id"], 1)]),
            await place_order(db_session, seed, [(seed["packet_product_id"], 3)]),
            await place_order(db_session, seed, [(seed["tub_product_id"], 2), (seed["packet_product_id"], 1)]),
        ]

        credited = Decimal("0.00")
        for order_id in reversed(orders):
            result = await settle_use_case(db_session).execute(
                SettleDeliveryCommandDTO(order_id=order_id, actor=STAFF)
            )
            assert result.is_ok(), result.error
            credited += result.value.final_bill_amount

        assert credited == Decimal("100.00") + Decimal("600.00") + Decimal("400.00")
        assert await wallet_balance(db_session, seed["distributor_id"]) == credited

    @pytest.mark.asyncio
    async def test_racing_settlements_credit_once(self, db_session, session_factory, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])
        command = SettleDeliveryCommandDTO(order_id=order_id, actor=STAFF)

        async def settle():
            async with session_factory() as session:
                return await settle_use_case(session).execute(command)

        results = await asyncio.gather(settle(), settle())

        succeeded = [r for r in results if r.is_ok()]
        assert len(succeeded) == 1
        failed = [r for r in results if r.is_err()]
        assert failed[0].error.code in {
            "ALREADY_SETTLED",
            "CONCURRENT_MODIFICATION",
            "PERSISTENCE_FAILURE",
        }
        assert await wallet_balance(db_session, seed["distributor_id"]) == Decimal("200.00")

    @pytest.mark.asyncio
    async def test_settled_order_cannot_be_edited_or_deleted(self, db_session, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])
        await settle_use_case(db_session).execute(SettleDeliveryCommandDTO(order_id=order_id, actor=STAFF))

        update = await UpdateOrder(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyOrderRepository(db_session),
            SqlAlchemyBillRepository(db_session),
            SqlAlchemyProductRepository(db_session),
        ).execute(
            UpdateOrderCommandDTO(
                order_id=order_id,
                items=[OrderItemDTO(product_id=seed["tub_product_id"], quantity=Decimal("9"), unit="tub")],
                actor=STAFF,
            )
        )
        delete = await DeleteOrder(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyOrderRepository(db_session),
            SqlAlchemyBillRepository(db_session),
        ).execute(DeleteOrderCommandDTO(order_id=order_id, actor=STAFF))

        assert update.error.code == "ORDER_LOCKED"
        assert delete.error.code == "ORDER_LOCKED"
        items = await SqlAlchemyOrderRepository(db_session).get_items(order_id)
        assert [item.quantity for item in items] == [Decimal("2")]

    @pytest.mark.asyncio
    async def test_edit_bumps_version_and_stale_claim_loses(self, db_session, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])
        order_repo = SqlAlchemyOrderRepository(db_session)

        update = await UpdateOrder(
            SqlAlchemyUnitOfWork(db_session),
            order_repo,
            SqlAlchemyBillRepository(db_session),
            SqlAlchemyProductRepository(db_session),
        ).execute(
            UpdateOrderCommandDTO(
                order_id=order_id,
                items=[OrderItemDTO(product_id=seed["tub_product_id"], quantity=Decimal("3"), unit="tub")],
                actor=STAFF,
            )
        )
        assert update.is_ok()

        claimed = await order_repo.claim_for_delivery(
            order_id, 1, [], Decimal("0.00"), Decimal("300.00"), STAFF, datetime.utcnow()
        )
        await db_session.rollback()

        assert claimed is False
        order = await order_repo.get_by_id(order_id)
        assert order.version == 2
        assert order.locked is False

        bill = await SqlAlchemyBillRepository(db_session).get_by_order_id(order_id)
        assert bill.total_amount == Decimal("300.00")

    @pytest.mark.asyncio
    async def test_delete_removes_draft_bill(self, db_session, seed):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])

        result = await DeleteOrder(
            SqlAlchemyUnitOfWork(db_session),
            SqlAlchemyOrderRepository(db_session),
            SqlAlchemyBillRepository(db_session),
        ).execute(DeleteOrderCommandDTO(order_id=order_id, actor=STAFF))

        assert result.is_ok()
        assert await SqlAlchemyOrderRepository(db_session).get_by_id(order_id) is None
        assert await SqlAlchemyBillRepository(db_session).get_by_order_id(order_id) is None

    @pytest.mark.asyncio
    async def test_concurrent_settlements_of_different_orders_conserve_wallet(
        self, db_session, session_factory, seed
    ):
        orders = {
            await place_order(db_session, seed, [(seed["tub_product_id"], 1)]): Decimal("100.00"),
            await place_order(db_session, seed, [(seed["packet_product_id"], 3)]): Decimal("600.00"),
            await place_order(db_session, seed, [(seed["tub_product_id"], 2), (seed["packet_product_id"], 1)]): Decimal("400.00"),
        }

        async def settle(order_id):
            async with session_factory() as session:
                return order_id, await settle_use_case(session).execute(
                    SettleDeliveryCommandDTO(order_id=order_id, actor=STAFF)
                )

        outcomes = await asyncio.gather(*(settle(order_id) for order_id in orders))

        credited = {order_id: r.value.credited_amount for order_id, r in outcomes if r.is_ok()}
        assert credited
        assert await wallet_balance(db_session, seed["distributor_id"]) == sum(credited.values())

        # a writer turned away by the database retries cleanly
        for order_id, result in outcomes:
            if result.is_err():
                assert result.error.code == "PERSISTENCE_FAILURE"
                _, retried = await settle(order_id)
                assert retried.is_ok(), retried.error
                credited[order_id] = retried.value.credited_amount

        assert credited == orders
        assert await wallet_balance(db_session, seed["distributor_id"]) == Decimal("1100.00")

    @pytest.mark.asyncio
    async def test_bill_preview_cannot_rewrite_bill_locked_by_settlement(
        self, db_session, session_factory, seed
    ):
        order_id = await place_order(db_session, seed, [(seed["tub_product_id"], 2)])
        settlement = {}

        class SettleAfterBillRead(SqlAlchemyBillRepository):
            """Settles the order in another session right after the draft bill is read"""

            async def get_by_order_id(self, bill_order_id):
                bill = await super().get_by_order_id(bill_order_id)
                async with session_factory() as other:
                    settlement["result"] = await settle_use_case(other).execute(
                        SettleDeliveryCommandDTO(
                            order_id=order_id,
                            damaged_products=[
                                DamagedDeclarationDTO(product_id=seed["packet_product_id"], damaged_quantity=1)
                            ],
                            actor=STAFF,
                        )
                    )
                return bill

        async with session_factory() as session:
            preview = await UpsertBill(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyOrderRepository(session),
                SettleAfterBillRead(session),
                SqlAlchemyProductRepository(session),
            ).execute(UpsertBillCommandDTO(order_id=order_id, actor=STAFF))

        assert settlement["result"].is_ok(), settlement["result"].error
        assert preview.is_err()
        assert preview.error.code == "BILL_LOCKED"

        async with session_factory() as session:
            bill_repo = SqlAlchemyBillRepository(session)
            bill = await bill_repo.get_by_order_id(order_id)
            lines = await bill_repo.get_lines(bill.id)

        assert bill.locked is True
        assert bill.total_amount == Decimal("180.00")
        assert bill.total_damaged_cost == Decimal("20.00")
        item_total = sum(line.total for line in lines if line.line_type == BillLineType.ITEM)
        damaged_total = sum(line.total for line in lines if line.line_type == BillLineType.DAMAGED)
        assert item_total - damaged_total == bill.total_amount
        assert await wallet_balance(db_session, seed["distributor_id"]) == Decimal("180.00")
