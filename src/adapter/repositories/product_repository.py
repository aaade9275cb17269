"""SQLAlchemy implementation of ProductRepository"""

from typing import Dict, Iterable, List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.product_repository import ProductRepository
from src.domain.product import Product


class SqlAlchemyProductRepository(ProductRepository):
    """SQLAlchemy implementation of ProductRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, product: Product) -> Product:
        self.session.add(product)
        await self.session.flush()
        await self.session.refresh(product)
        return product

    async def get_by_id(self, product_id: int) -> Optional[Product]:
        stmt = select(Product).where(Product.id == product_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        ids = set(product_ids)
        if not ids:
            return {}

        stmt = select(Product).where(Product.id.in_(ids))
        result = await self.session.execute(stmt)
        return {product.id: product for product in result.scalars().all()}

    async def list_products(self, limit: int = 100, offset: int = 0) -> List[Product]:
        stmt = (
            select(Product)
            .order_by(Product.company, Product.name)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
