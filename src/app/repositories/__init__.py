from .order_repository import OrderRepository
from .bill_repository import BillRepository
from .distributor_repository import DistributorRepository
from .product_repository import ProductRepository
from .payment_repository import PaymentRepository
from .user_repository import UserRepository

__all__ = [
    "OrderRepository",
    "BillRepository",
    "DistributorRepository",
    "ProductRepository",
    "PaymentRepository",
    "UserRepository",
]
