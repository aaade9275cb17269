"""DeleteOrder Use Case

Deletes a pending order together with its draft bill.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.order_repository import OrderRepository
from .dtos import DeleteOrderCommandDTO

logger = logging.getLogger(__name__)


class DeleteOrder:
    """
    Use Case: Delete a pending order

    Business Rules:
    1. Order must exist
    2. Locked orders cannot be deleted
    3. Admin/staff may delete any order; others only the orders they placed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        bill_repo: BillRepository,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.bill_repo = bill_repo

    async def execute(self, command: DeleteOrderCommandDTO) -> Result[int]:
        try:
            order = await self.order_repo.get_by_id(command.order_id)
            if not order:
                return Return.err(
                    Error(code="ORDER_NOT_FOUND", message=f"Order {command.order_id} not found")
                )

            if order.locked:
                return Return.err(
                    Error(code="ORDER_LOCKED", message="Order is locked and cannot be deleted")
                )

            actor = command.actor
            if not (actor.is_back_office or actor.owns(order.placed_by_kind, order.placed_by_id)):
                return Return.err(
                    Error(code="FORBIDDEN", message="You can only delete your own orders")
                )

            order_id = order.id
            await self.bill_repo.delete_unlocked_for_order(order_id)
            deleted = await self.order_repo.delete_if_unlocked(order_id)
            if not deleted:
                await self.uow.rollback()
                return Return.err(
                    Error(code="ORDER_LOCKED", message="Order is locked and cannot be deleted")
                )

            await self.uow.commit()
            logger.info(f"Order {order_id} deleted by {actor.kind.value}:{actor.id}")
            return Return.ok(order_id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to delete order",
                    reason=str(e),
                )
            )
