"""UpsertBill Use Case

Creates or recomputes the bill of a pending order from its current
snapshot. Used to preview a bill before delivery; no damaged goods are
declared here, so the total equals the subtotal.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from .bill_computation import compute_bill
from .bill_ledger import save_computed_bill, to_bill_response
from .dtos import UpsertBillCommandDTO, UpsertBillResponseDTO


class UpsertBill:
    """
    Use Case: Create or update the bill of an order

    Business Rules:
    1. Order must exist
    2. Locked orders and locked bills are never rewritten
    3. At most one bill per order

    Flow:
    1. Load order and items
    2. Price items against the catalog
    3. Create the bill or overwrite the unlocked one
    4. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        bill_repo: BillRepository,
        product_repo: ProductRepository,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.bill_repo = bill_repo
        self.product_repo = product_repo

    async def execute(self, command: UpsertBillCommandDTO) -> Result[UpsertBillResponseDTO]:
        try:
            order = await self.order_repo.get_by_id(command.order_id)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order {command.order_id} not found",
                    )
                )

            if order.locked:
                return Return.err(
                    Error(
                        code="ORDER_LOCKED",
                        message="Order is locked and bill cannot be modified",
                    )
                )

            if order.distributor_id is None:
                return Return.err(
                    Error(
                        code="INVALID_ORDER_STATE",
                        message=f"Order {command.order_id} has no distributor",
                    )
                )

            items = await self.order_repo.get_items(order.id)
            catalog = await self.product_repo.get_many(item.product_id for item in items)
            computation = compute_bill(items, [], catalog)

            saved = await save_computed_bill(
                self.bill_repo, order, computation, command.actor, lock=False
            )
            if saved.is_err():
                await self.uow.rollback()
                return Return.err(saved.error)

            bill, created = saved.value
            lines = await self.bill_repo.get_lines(bill.id)
            response = UpsertBillResponseDTO(
                bill=to_bill_response(bill, lines),
                created=created,
            )

            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to generate/update bill",
                    reason=str(e),
                )
            )
