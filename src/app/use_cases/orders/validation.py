"""Order input checks shared by CreateOrder and UpdateOrder"""

from datetime import date
from typing import List, Optional
from libs.result import Error
from src.app.repositories.product_repository import ProductRepository
from .dtos import OrderItemDTO


def check_order_date(order_date: date, today: date) -> Optional[Error]:
    """Orders can only be placed from tomorrow onwards"""
    if order_date <= today:
        return Error(
            code="VALIDATION_ERROR",
            message="Orders can only be placed from tomorrow onwards",
            reason=f"today={today.isoformat()}, order_date={order_date.isoformat()}",
        )
    return None


async def check_order_items(
    product_repo: ProductRepository, items: List[OrderItemDTO]
) -> Optional[Error]:
    """Items must be non-empty and reference existing products"""
    if not items:
        return Error(
            code="VALIDATION_ERROR",
            message="Order must contain at least one item",
        )

    catalog = await product_repo.get_many(item.product_id for item in items)
    for index, item in enumerate(items):
        if item.product_id not in catalog:
            return Error(
                code="PRODUCT_NOT_FOUND",
                message=f"Invalid productId at index {index}",
                reason=f"product {item.product_id} does not exist",
            )
    return None
