"""Product catalog use cases"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.product_repository import ProductRepository
from src.domain.base import to_money
from src.domain.product import Product
from .dtos import CreateProductCommandDTO, ProductResponseDTO


def to_product_response(product: Product) -> ProductResponseDTO:
    return ProductResponseDTO(
        product_id=product.id,
        company=product.company,
        name=product.name,
        quantity=product.quantity,
        unit=product.unit,
        image_url=product.image_url,
        cost_per_tub=product.cost_per_tub,
        cost_per_packet=product.cost_per_packet,
        packets_per_tub=product.packets_per_tub,
        created_at=product.created_at,
    )


class CreateProduct:
    """
    Use Case: Add a product

    When only packet pricing is given, the tub cost is derived from it so
    that cost_per_tub == cost_per_packet * packets_per_tub holds.
    """

    def __init__(self, uow: UnitOfWork, product_repo: ProductRepository):
        self.uow = uow
        self.product_repo = product_repo

    async def execute(self, command: CreateProductCommandDTO) -> Result[ProductResponseDTO]:
        cost_per_tub = command.cost_per_tub
        if cost_per_tub is None and command.cost_per_packet is not None and command.packets_per_tub:
            cost_per_tub = command.cost_per_packet * command.packets_per_tub

        try:
            product = await self.product_repo.create(
                Product(
                    company=command.company,
                    name=command.name,
                    quantity=command.quantity,
                    unit=command.unit,
                    image_url=command.image_url,
                    cost_per_tub=to_money(cost_per_tub) if cost_per_tub is not None else None,
                    cost_per_packet=(
                        to_money(command.cost_per_packet)
                        if command.cost_per_packet is not None else None
                    ),
                    packets_per_tub=command.packets_per_tub,
                )
            )
            response = to_product_response(product)
            await self.uow.commit()
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to create product",
                    reason=str(e),
                )
            )


class GetProduct:
    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def execute(self, product_id: int) -> Result[ProductResponseDTO]:
        product = await self.product_repo.get_by_id(product_id)
        if not product:
            return Return.err(
                Error(code="PRODUCT_NOT_FOUND", message=f"Product {product_id} not found")
            )
        return Return.ok(to_product_response(product))


class ListProducts:
    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def execute(self, limit: int = 100, offset: int = 0) -> Result[list[ProductResponseDTO]]:
        products = await self.product_repo.list_products(limit=limit, offset=offset)
        return Return.ok([to_product_response(product) for product in products])
