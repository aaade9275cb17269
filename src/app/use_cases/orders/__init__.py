from .create_order import CreateOrder
from .update_order import UpdateOrder
from .delete_order import DeleteOrder
from .settle_delivery import SettleDelivery
from .list_orders import ListOrders, ListTomorrowOrders
from .dtos import (
    OrderItemDTO,
    CreateOrderCommandDTO,
    UpdateOrderCommandDTO,
    DeleteOrderCommandDTO,
    SettleDeliveryCommandDTO,
    OrderResponseDTO,
    PlacedByDTO,
    SettlementResponseDTO,
)

__all__ = [
    "CreateOrder",
    "UpdateOrder",
    "DeleteOrder",
    "SettleDelivery",
    "ListOrders",
    "ListTomorrowOrders",
    "OrderItemDTO",
    "CreateOrderCommandDTO",
    "UpdateOrderCommandDTO",
    "DeleteOrderCommandDTO",
    "SettleDeliveryCommandDTO",
    "OrderResponseDTO",
    "PlacedByDTO",
    "SettlementResponseDTO",
]
