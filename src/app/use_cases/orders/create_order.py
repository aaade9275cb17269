"""CreateOrder Use Case

Places a pending order for a distributor and drafts its bill.
"""

import logging
from datetime import date
from typing import Callable
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.distributor_repository import DistributorRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.use_cases.billing.bill_computation import compute_bill
from src.app.use_cases.billing.bill_ledger import save_computed_bill
from src.domain.order import Order, OrderItem, OrderStatus
from .dtos import CreateOrderCommandDTO, OrderResponseDTO
from .mappers import to_order_response
from .validation import check_order_date, check_order_items

logger = logging.getLogger(__name__)


class CreateOrder:
    """
    Use Case: Place an order

    Business Rules:
    1. Only admin or staff actors place orders
    2. Distributor must exist
    3. At least one item; every product must exist
    4. Order date is tomorrow or later
    5. Created pending and unlocked; a draft bill is written alongside

    Flow:
    1. Validate actor, date, distributor and items
    2. Create order + items
    3. Draft the bill from the same items
    4. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        bill_repo: BillRepository,
        product_repo: ProductRepository,
        distributor_repo: DistributorRepository,
        today: Callable[[], date] = date.today,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.bill_repo = bill_repo
        self.product_repo = product_repo
        self.distributor_repo = distributor_repo
        self.today = today

    async def execute(self, command: CreateOrderCommandDTO) -> Result[OrderResponseDTO]:
        if not command.actor.is_back_office:
            return Return.err(
                Error(
                    code="FORBIDDEN",
                    message="Only admin or staff can place orders",
                )
            )

        date_error = check_order_date(command.order_date, self.today())
        if date_error:
            return Return.err(date_error)

        try:
            distributor = await self.distributor_repo.get_by_id(command.distributor_id)
            if not distributor:
                return Return.err(
                    Error(
                        code="DISTRIBUTOR_NOT_FOUND",
                        message=f"Distributor {command.distributor_id} not found",
                    )
                )

            items_error = await check_order_items(self.product_repo, command.items)
            if items_error:
                return Return.err(items_error)

            order = Order(
                placed_by_kind=command.actor.kind,
                placed_by_id=command.actor.id,
                distributor_id=command.distributor_id,
                customer_name=command.customer_name or "Customer",
                customer_phone=command.customer_phone,
                order_date=command.order_date,
                status=OrderStatus.PENDING,
                locked=False,
            )
            items = [
                OrderItem(product_id=item.product_id, quantity=item.quantity, unit=item.unit)
                for item in command.items
            ]
            order = await self.order_repo.create(order, items)

            catalog = await self.product_repo.get_many(item.product_id for item in items)
            saved = await save_computed_bill(
                self.bill_repo, order, compute_bill(items, [], catalog), command.actor
            )
            if saved.is_err():
                await self.uow.rollback()
                return Return.err(saved.error)

            response = to_order_response(order, items)
            await self.uow.commit()

            logger.info(
                f"Order {response.order_id} placed by {command.actor.kind.value}:{command.actor.id} "
                f"for distributor {command.distributor_id}"
            )
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to place order",
                    reason=str(e),
                )
            )
