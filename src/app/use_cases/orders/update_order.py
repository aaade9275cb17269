"""UpdateOrder Use Case

Edits the date and/or items of a pending order and refreshes its draft
bill. Locked orders are rejected.
"""

from datetime import date
from typing import Callable
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.app.use_cases.billing.bill_computation import compute_bill
from src.app.use_cases.billing.bill_ledger import save_computed_bill
from src.domain.order import OrderItem
from .dtos import UpdateOrderCommandDTO, OrderResponseDTO
from .mappers import to_order_response
from .validation import check_order_date, check_order_items


class UpdateOrder:
    """
    Use Case: Edit a pending order

    Business Rules:
    1. Order must exist
    2. Locked orders cannot be updated
    3. Admin/staff may edit any order; others only the orders they placed
    4. The edit is a conditional write on (locked=false, version); losing it
       reports the lock or the concurrent edit

    Flow:
    1. Load and gate the order
    2. Validate new date/items
    3. Conditional update + item replacement
    4. Refresh draft bill
    5. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        bill_repo: BillRepository,
        product_repo: ProductRepository,
        today: Callable[[], date] = date.today,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.bill_repo = bill_repo
        self.product_repo = product_repo
        self.today = today

    async def execute(self, command: UpdateOrderCommandDTO) -> Result[OrderResponseDTO]:
        try:
            order = await self.order_repo.get_by_id(command.order_id)
            if not order:
                return Return.err(
                    Error(code="ORDER_NOT_FOUND", message=f"Order {command.order_id} not found")
                )

            if order.locked:
                return Return.err(
                    Error(code="ORDER_LOCKED", message="Order is locked and cannot be updated")
                )

            actor = command.actor
            if not (actor.is_back_office or actor.owns(order.placed_by_kind, order.placed_by_id)):
                return Return.err(
                    Error(code="FORBIDDEN", message="You can only update your own orders")
                )

            if command.order_date is not None:
                date_error = check_order_date(command.order_date, self.today())
                if date_error:
                    return Return.err(date_error)

            if command.items is not None:
                items_error = await check_order_items(self.product_repo, command.items)
                if items_error:
                    return Return.err(items_error)

            order_id = order.id
            updated = await self.order_repo.update_if_unlocked(
                order_id, order.version, command.order_date, actor
            )
            if not updated:
                await self.uow.rollback()
                current = await self.order_repo.get_by_id(order_id)
                if current and current.locked:
                    return Return.err(
                        Error(code="ORDER_LOCKED", message="Order is locked and cannot be updated")
                    )
                return Return.err(
                    Error(
                        code="CONCURRENT_MODIFICATION",
                        message=f"Order {order_id} was modified by another request",
                    )
                )

            if command.items is not None:
                await self.order_repo.replace_items(
                    order_id,
                    [
                        OrderItem(product_id=item.product_id, quantity=item.quantity, unit=item.unit)
                        for item in command.items
                    ],
                )

            order = await self.order_repo.get_by_id(order_id)
            items = await self.order_repo.get_items(order_id)
            catalog = await self.product_repo.get_many(item.product_id for item in items)
            saved = await save_computed_bill(
                self.bill_repo, order, compute_bill(items, [], catalog), actor
            )
            if saved.is_err():
                await self.uow.rollback()
                return Return.err(saved.error)

            response = to_order_response(order, items)
            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to update order",
                    reason=str(e),
                )
            )
