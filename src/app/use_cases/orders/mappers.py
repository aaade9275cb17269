"""Entity -> DTO mapping for orders"""

from typing import List, Optional
from src.domain.actor import Actor
from src.domain.order import Order, OrderItem, OrderDamagedItem
from src.app.use_cases.billing.dtos import BillLineDTO
from .dtos import OrderItemResponseDTO, OrderResponseDTO, PlacedByDTO


def to_order_response(
    order: Order,
    items: List[OrderItem],
    damaged_items: Optional[List[OrderDamagedItem]] = None,
    placed_by: Optional[PlacedByDTO] = None,
) -> OrderResponseDTO:
    return OrderResponseDTO(
        order_id=order.id,
        distributor_id=order.distributor_id,
        placed_by=placed_by or PlacedByDTO(kind=order.placed_by_kind, id=order.placed_by_id),
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        order_date=order.order_date,
        delivery_date=order.delivery_date,
        status=order.status.value,
        locked=order.locked,
        items=[
            OrderItemResponseDTO(product_id=item.product_id, quantity=item.quantity, unit=item.unit)
            for item in items
        ],
        damaged_products=[
            BillLineDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit=item.unit,
                price=item.price,
                total=item.total,
            )
            for item in damaged_items or []
        ],
        total_damaged_cost=order.total_damaged_cost,
        final_bill_amount=order.final_bill_amount,
        updated_by=updated_by_of(order),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def updated_by_of(order: Order) -> Optional[Actor]:
    if order.updated_by_kind is None or order.updated_by_id is None:
        return None
    return Actor(kind=order.updated_by_kind, id=order.updated_by_id, name=order.updated_by_name)
