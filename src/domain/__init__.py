from .base import BaseModel, IdType, to_money
from .actor import Actor, ActorKind, BACK_OFFICE_KINDS
from .user import Admin, Staff
from .distributor import Distributor, DistributorStatus
from .product import Product, ProductUnit
from .order import Order, OrderItem, OrderDamagedItem, OrderStatus
from .bill import Bill, BillLine, BillLineType, BillStatus
from .payment import Payment, PaymentMethod

__all__ = [
    "BaseModel",
    "IdType",
    "to_money",
    "Actor",
    "ActorKind",
    "BACK_OFFICE_KINDS",
    "Admin",
    "Staff",
    "Distributor",
    "DistributorStatus",
    "Product",
    "ProductUnit",
    "Order",
    "OrderItem",
    "OrderDamagedItem",
    "OrderStatus",
    "Bill",
    "BillLine",
    "BillLineType",
    "BillStatus",
    "Payment",
    "PaymentMethod",
]
