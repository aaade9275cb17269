"""Product catalog API Routes"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_actor, require_back_office
from src.api.error import ClientError
from src.app.use_cases.catalog import CreateProduct, GetProduct, ListProducts
from src.app.use_cases.catalog.dtos import CreateProductCommandDTO, ProductResponseDTO
from src.adapter.repositories import SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.domain.actor import Actor

router = APIRouter(prefix="/products", tags=["Products"])


@router.post("", response_model=ProductResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: CreateProductCommandDTO,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    use_case = CreateProduct(SqlAlchemyUnitOfWork(session), SqlAlchemyProductRepository(session))
    result = await use_case.execute(body)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=List[ProductResponseDTO])
async def list_products(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    result = await ListProducts(SqlAlchemyProductRepository(session)).execute(limit, offset)
    return result.value


@router.get("/{product_id}", response_model=ProductResponseDTO)
async def get_product(
    product_id: int,
    actor: Actor = Depends(get_actor),
    session: AsyncSession = Depends(get_session),
):
    result = await GetProduct(SqlAlchemyProductRepository(session)).execute(product_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
