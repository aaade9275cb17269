"""Product Repository Interface

Catalog lookup used by billing.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from src.domain.product import Product


class ProductRepository(ABC):
    """Repository interface for Product persistence"""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """Create a new product"""
        pass

    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        """Retrieve product by ID"""
        pass

    @abstractmethod
    async def get_many(self, product_ids: Iterable[int]) -> Dict[int, Product]:
        """
        Batch lookup of products

        Args:
            product_ids: Product IDs (duplicates allowed)

        Returns:
            Mapping of ID to Product for the IDs that exist
        """
        pass

    @abstractmethod
    async def list_products(self, limit: int = 100, offset: int = 0) -> List[Product]:
        """List catalog products"""
        pass
