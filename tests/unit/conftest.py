from datetime import date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
import pytest

from src.domain.actor import Actor, ActorKind
from src.domain.bill import Bill
from src.domain.distributor import Distributor
from src.domain.order import Order, OrderItem, OrderStatus
from src.domain.product import Product, ProductUnit


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def staff_actor():
    return Actor(kind=ActorKind.STAFF, id=7, name="Anil")


@pytest.fixture
def admin_actor():
    return Actor(kind=ActorKind.ADMIN, id=1, name="root")


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)


@pytest.fixture
def product_a():
    """Priced per tub"""
    return Product(
        id=1,
        company="Aavin",
        name="Full Cream 1L",
        quantity=Decimal("1"),
        unit=ProductUnit.ML,
        cost_per_tub=Decimal("100.00"),
        cost_per_packet=Decimal("10.00"),
        packets_per_tub=10,
    )


@pytest.fixture
def product_b():
    """Priced per packet only"""
    return Product(
        id=2,
        company="Aavin",
        name="Toned Milk 500ml",
        quantity=Decimal("500"),
        unit=ProductUnit.ML,
        cost_per_tub=None,
        cost_per_packet=Decimal("20.00"),
        packets_per_tub=10,
    )


@pytest.fixture
def pending_order(staff_actor, tomorrow):
    return Order(
        id=31,
        placed_by_kind=staff_actor.kind,
        placed_by_id=staff_actor.id,
        distributor_id=5,
        customer_name="Ravi Dairy Agency",
        order_date=tomorrow,
        status=OrderStatus.PENDING,
        locked=False,
        version=1,
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow(),
    )


@pytest.fixture
def distributor():
    return Distributor(
        id=5,
        distributor_name="Ravi Kumar",
        company_name="Ravi Dairy Agency",
        username="ravi",
        wallet_balance=Decimal("1000.00"),
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow(),
    )


@pytest.fixture
def mock_bill_repo():
    """Bill repository with no existing bill; create echoes with an id"""
    repo = MagicMock()
    repo.get_by_order_id = AsyncMock(return_value=None)
    repo.generate_bill_number = AsyncMock(return_value="BILL-20240102-0042")

    async def create(bill: Bill) -> Bill:
        bill.id = 12
        return bill

    async def update_if_unlocked(bill_id: int, values) -> Bill:
        return Bill(
            id=bill_id,
            bill_number="BILL-20240101-1234",
            distributor_id=5,
            order_id=31,
            **values,
        )

    repo.create = AsyncMock(side_effect=create)
    repo.update_if_unlocked = AsyncMock(side_effect=update_if_unlocked)
    repo.replace_lines = AsyncMock()
    repo.get_lines = AsyncMock(return_value=[])
    repo.delete_unlocked_for_order = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def make_items():
    """[(product_id, quantity), ...] -> OrderItem list"""

    def build(*pairs):
        return [
            OrderItem(
                id=index + 1,
                order_id=31,
                product_id=pid,
                quantity=Decimal(str(qty)),
                unit="tub",
            )
            for index, (pid, qty) in enumerate(pairs)
        ]

    return build
