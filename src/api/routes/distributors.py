"""Distributor API Routes"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import require_back_office
from src.api.error import ClientError
from src.app.use_cases.catalog import CreateDistributor, GetDistributor, ListDistributors
from src.app.use_cases.catalog.dtos import CreateDistributorCommandDTO, DistributorResponseDTO
from src.adapter.repositories import SqlAlchemyDistributorRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.domain.actor import Actor

router = APIRouter(prefix="/distributors", tags=["Distributors"])


@router.post("", response_model=DistributorResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_distributor(
    body: CreateDistributorCommandDTO,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    use_case = CreateDistributor(
        SqlAlchemyUnitOfWork(session), SqlAlchemyDistributorRepository(session)
    )
    result = await use_case.execute(body)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=List[DistributorResponseDTO])
async def list_distributors(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await ListDistributors(SqlAlchemyDistributorRepository(session)).execute(limit, offset)
    return result.value


@router.get("/{distributor_id}", response_model=DistributorResponseDTO)
async def get_distributor(
    distributor_id: int,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await GetDistributor(SqlAlchemyDistributorRepository(session)).execute(distributor_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
