from .order_repository import SqlAlchemyOrderRepository
from .bill_repository import SqlAlchemyBillRepository, BillNumberExhausted
from .distributor_repository import SqlAlchemyDistributorRepository
from .product_repository import SqlAlchemyProductRepository
from .payment_repository import SqlAlchemyPaymentRepository
from .user_repository import SqlAlchemyAdminRepository, SqlAlchemyStaffRepository

__all__ = [
    "SqlAlchemyOrderRepository",
    "SqlAlchemyBillRepository",
    "BillNumberExhausted",
    "SqlAlchemyDistributorRepository",
    "SqlAlchemyProductRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyAdminRepository",
    "SqlAlchemyStaffRepository",
]
