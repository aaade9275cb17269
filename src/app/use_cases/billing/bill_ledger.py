"""Bill ledger helpers

Create-or-update of the single bill that belongs to an order, shared by the
bill upsert endpoint, order create/update and the settlement engine.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.domain.actor import Actor
from src.domain.bill import Bill, BillLine, BillLineType, BillStatus
from src.domain.order import Order
from .bill_computation import to_bill_lines
from .dtos import BillComputationDTO, BillLineDTO, BillResponseDTO


async def save_computed_bill(
    bill_repo: BillRepository,
    order: Order,
    computation: BillComputationDTO,
    actor: Actor,
    lock: bool = False,
) -> Result[Tuple[Bill, bool]]:
    """
    Write a computed bill for an order

    Creates the bill when the order has none, otherwise overwrites the
    totals of the existing bill with a write that only lands while the bill
    is unlocked, and replaces its lines after that write wins. With
    ``lock=True`` the bill is written locked and completed.

    Returns:
        Result[(bill, created)] or BILL_LOCKED when the existing bill is locked
    """
    bill = await bill_repo.get_by_order_id(order.id)
    now = datetime.utcnow()
    created = bill is None

    if bill is not None and bill.locked:
        return Return.err(_bill_locked(order.id, reason="Bill already finalized"))

    values = {
        "subtotal": computation.subtotal,
        "total_damaged_cost": computation.total_damaged_cost,
        "total_amount": computation.total_amount,
        "updated_by_kind": actor.kind,
        "updated_by_id": actor.id,
        "updated_by_name": actor.name,
    }
    if lock:
        values["locked"] = True
        values["status"] = BillStatus.COMPLETED

    if created:
        bill = await bill_repo.create(
            Bill(
                bill_number=await bill_repo.generate_bill_number(),
                distributor_id=order.distributor_id,
                order_id=order.id,
                bill_date=now,
                customer_name=order.customer_name or "Customer",
                customer_phone=order.customer_phone,
                **values,
            )
        )
    else:
        bill = await bill_repo.update_if_unlocked(bill.id, {**values, "bill_date": now})
        if bill is None:
            return Return.err(_bill_locked(order.id, reason="Bill locked by a concurrent settlement"))

    await bill_repo.replace_lines(bill.id, to_bill_lines(computation))
    return Return.ok((bill, created))


def _bill_locked(order_id: int, reason: str) -> Error:
    return Error(
        code="BILL_LOCKED",
        message=f"Bill for order {order_id} is locked",
        reason=reason,
    )


def to_bill_response(bill: Bill, lines: List[BillLine]) -> BillResponseDTO:
    """Build the response DTO of a bill and its lines"""
    items = [_to_line_dto(line) for line in lines if line.line_type == BillLineType.ITEM]
    damaged = [_to_line_dto(line) for line in lines if line.line_type == BillLineType.DAMAGED]

    return BillResponseDTO(
        bill_id=bill.id,
        bill_number=bill.bill_number,
        order_id=bill.order_id,
        distributor_id=bill.distributor_id,
        bill_date=bill.bill_date,
        customer_name=bill.customer_name,
        customer_phone=bill.customer_phone,
        items=items,
        damaged_products=damaged,
        subtotal=bill.subtotal,
        total_damaged_cost=bill.total_damaged_cost,
        total_amount=bill.total_amount,
        payment_method=bill.payment_method,
        status=bill.status.value,
        locked=bill.locked,
        updated_by=_updated_by(bill),
        created_at=bill.created_at,
        updated_at=bill.updated_at,
    )


def _updated_by(bill: Bill) -> Optional[Actor]:
    if bill.updated_by_kind is None or bill.updated_by_id is None:
        return None
    return Actor(kind=bill.updated_by_kind, id=bill.updated_by_id, name=bill.updated_by_name)


def _to_line_dto(line: BillLine) -> BillLineDTO:
    return BillLineDTO(
        product_id=line.product_id,
        product_name=line.product_name,
        quantity=line.quantity,
        unit=line.unit,
        price=line.price,
        total=line.total,
    )
