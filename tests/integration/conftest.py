from datetime import date, timedelta
from decimal import Decimal
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers table models
from src.depends import get_session
from src.domain.distributor import Distributor, DistributorStatus
from src.domain.product import Product, ProductUnit

ACTOR_HEADERS = {"X-Actor-Role": "staff", "X-Actor-Id": "7", "X-Actor-Name": "Anil"}


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a throwaway SQLite database per test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'milksync_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed(db_session):
    """One distributor and two products: per-tub (100) and per-packet (20 x 10)"""
    distributor = Distributor(
        distributor_name="Ravi Kumar",
        company_name="Ravi Dairy Agency",
        username="ravi",
        status=DistributorStatus.ACTIVE,
        wallet_balance=Decimal("0.00"),
    )
    tub_product = Product(
        company="Aavin",
        name="Full Cream 1L",
        quantity=Decimal("1"),
        unit=ProductUnit.ML,
        cost_per_tub=Decimal("100.00"),
    )
    packet_product = Product(
        company="Aavin",
        name="Toned Milk 500ml",
        quantity=Decimal("500"),
        unit=ProductUnit.ML,
        cost_per_packet=Decimal("20.00"),
        packets_per_tub=10,
    )
    db_session.add_all([distributor, tub_product, packet_product])
    await db_session.commit()

    return {
        "distributor_id": distributor.id,
        "tub_product_id": tub_product.id,
        "packet_product_id": packet_product.id,
        "tomorrow": date.today() + timedelta(days=1),
    }


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    class TestConfig(ApplicationConfig):
        AUTO_CREATE_TABLES = False
        ENABLE_SENTRY = 0
        AUTH_DISABLED = False
        API_PREFIX = ""
        SETTLEMENT_ALERT_WEBHOOK = None

    app = create_app(TestConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=ACTOR_HEADERS,
    ) as ac:
        yield ac
