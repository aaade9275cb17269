"""SettleDelivery Use Case

Marks an order delivered, finalizes its bill and credits the distributor's
wallet with the final bill amount, exactly once.
"""

import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.notification_service import NotificationService
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.distributor_repository import DistributorRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.use_cases.billing.bill_computation import compute_bill
from src.domain.order import OrderDamagedItem
from src.app.use_cases.billing.bill_ledger import save_computed_bill
from .dtos import SettleDeliveryCommandDTO, SettlementResponseDTO

logger = logging.getLogger(__name__)


class SettleDelivery:
    """
    Use Case: Settle a delivery

    Business Rules:
    1. Order must exist, have a distributor and at least one item
    2. A delivered/locked order is never settled twice (ALREADY_SETTLED)
    3. Bill total = max(subtotal - damaged cost, 0)
    4. The order is claimed with a conditional write on
       (locked=false, status=pending, version) before any wallet credit;
       only the winner of the claim credits the wallet
    5. Bill, claim and credit commit in one transaction
    6. Anything failing after the credit rolls back and raises an alert

    Flow:
    1. Load and gate order
    2. Price items + damaged declarations
    3. Write locked bill
    4. Claim order (delivered + locked)
    5. Credit wallet
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        bill_repo: BillRepository,
        product_repo: ProductRepository,
        distributor_repo: DistributorRepository,
        notification_service: Optional[NotificationService] = None,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.bill_repo = bill_repo
        self.product_repo = product_repo
        self.distributor_repo = distributor_repo
        self.notification_service = notification_service

    async def execute(self, command: SettleDeliveryCommandDTO) -> Result[SettlementResponseDTO]:
        stamp = command.updated_by or command.actor
        credited = False
        order_id = command.order_id
        distributor_id = None
        total_amount = None

        try:
            # Step 1: Load and gate order
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                return Return.err(
                    Error(code="ORDER_NOT_FOUND", message=f"Order {order_id} not found")
                )

            if order.distributor_id is None:
                return Return.err(
                    Error(
                        code="INVALID_ORDER_STATE",
                        message="Order has no distributor assigned",
                    )
                )

            items = await self.order_repo.get_items(order_id)
            if not items:
                return Return.err(
                    Error(
                        code="INVALID_ORDER_STATE",
                        message="Order has no items",
                    )
                )

            if order.is_settled:
                return Return.err(
                    Error(
                        code="ALREADY_SETTLED",
                        message=f"Order {order_id} has already been delivered",
                    )
                )

            distributor_id = order.distributor_id
            expected_version = order.version

            # Step 2: Price items + damaged declarations
            declared = [d for d in command.damaged_products if d.damaged_quantity > 0]
            product_ids = {item.product_id for item in items}
            product_ids.update(d.product_id for d in declared)
            catalog = await self.product_repo.get_many(product_ids)
            computation = compute_bill(items, declared, catalog)
            total_amount = computation.total_amount

            # Step 3: Write locked bill
            saved = await save_computed_bill(
                self.bill_repo, order, computation, stamp, lock=True
            )
            if saved.is_err():
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="ALREADY_SETTLED",
                        message=f"Order {order_id} has already been billed",
                        reason=saved.error.message,
                    )
                )
            bill, created = saved.value
            bill_id = bill.id

            # Step 4: Claim order
            delivered_at = datetime.utcnow()
            claimed = await self.order_repo.claim_for_delivery(
                order_id,
                expected_version,
                [
                    OrderDamagedItem(
                        product_id=line.product_id,
                        product_name=line.product_name,
                        quantity=int(line.quantity),
                        unit=line.unit,
                        price=line.price,
                        total=line.total,
                    )
                    for line in computation.damaged_items
                ],
                computation.total_damaged_cost,
                total_amount,
                stamp,
                delivered_at,
            )
            if not claimed:
                await self.uow.rollback()
                current = await self.order_repo.get_by_id(order_id)
                if current and current.is_settled:
                    return Return.err(
                        Error(
                            code="ALREADY_SETTLED",
                            message=f"Order {order_id} has already been delivered",
                        )
                    )
                return Return.err(
                    Error(
                        code="CONCURRENT_MODIFICATION",
                        message=f"Order {order_id} was modified by another request",
                    )
                )

            # Step 5: Credit wallet
            balance = await self.distributor_repo.increment_balance(distributor_id, total_amount)
            if balance is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="DISTRIBUTOR_NOT_FOUND",
                        message=f"Distributor {distributor_id} not found",
                    )
                )
            credited = True

            # Step 6: Commit
            await self.uow.commit()

            logger.info(
                f"Settled order {order_id}: credited {total_amount} to distributor "
                f"{distributor_id} (balance {balance})"
            )

            return Return.ok(
                SettlementResponseDTO(
                    order_id=order_id,
                    bill_id=bill_id,
                    credited_amount=total_amount,
                    wallet_balance=balance,
                    bill_generated=created,
                    damaged_products=computation.damaged_items,
                    total_damaged_cost=computation.total_damaged_cost,
                    original_bill_amount=computation.subtotal,
                    final_bill_amount=total_amount,
                    updated_by=stamp,
                    updated_at=delivered_at,
                )
            )

        except IntegrityError as e:
            await self.uow.rollback()
            if credited:
                await self._alert(order_id, distributor_id, total_amount, str(e.orig))

            # Unique bill/order constraints: either the order was settled
            # meanwhile or another write (e.g. a bill number) collided
            current = await self.order_repo.get_by_id(order_id)
            if current and current.is_settled:
                return Return.err(
                    Error(
                        code="ALREADY_SETTLED",
                        message=f"Order {order_id} has already been delivered",
                        reason=str(e.orig),
                    )
                )
            return Return.err(
                Error(
                    code="CONCURRENT_MODIFICATION",
                    message=f"Order {order_id} conflicted with a concurrent write",
                    reason=str(e.orig),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            if credited:
                await self._alert(order_id, distributor_id, total_amount, str(e))
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to settle delivery",
                    reason=str(e),
                )
            )

    async def _alert(self, order_id: int, distributor_id: int, amount, reason: str) -> None:
        logger.error(
            f"Settlement of order {order_id} failed after crediting "
            f"{amount} to distributor {distributor_id}: {reason}"
        )
        if self.notification_service:
            await self.notification_service.send_settlement_alert(
                order_id=order_id,
                distributor_id=distributor_id,
                amount=amount,
                reason=reason,
            )
