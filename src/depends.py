from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def init_db():
    """Create all tables registered on SQLModel.metadata"""
    import src.domain  # noqa: F401  registers table models

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


def build_bill_repository(session: AsyncSession, config=ApplicationConfig):
    from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository

    return SqlAlchemyBillRepository(
        session,
        prefix=config.BILL_NUMBER_PREFIX,
        max_attempts=config.BILL_NUMBER_MAX_ATTEMPTS,
    )
