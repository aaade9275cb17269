"""Bill API Routes"""

from typing import List
from fastapi import APIRouter, Depends, Query, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import require_back_office
from src.api.error import ClientError
from src.api.schemas.bill_request import CreateBillRequestSchema
from src.app.use_cases.billing import UpsertBill, ListBills
from src.app.use_cases.billing.dtos import (
    BillResponseDTO,
    UpsertBillCommandDTO,
    UpsertBillResponseDTO,
)
from src.adapter.repositories import SqlAlchemyOrderRepository, SqlAlchemyProductRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import build_bill_repository, get_session
from src.domain.actor import Actor

router = APIRouter(prefix="/bills", tags=["Bills"])


@router.post(
    "/create",
    response_model=UpsertBillResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        403: {
            "description": "Order or bill locked",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ORDER_LOCKED",
                            "message": "Order is locked and bill cannot be modified"
                        }
                    }
                }
            }
        }
    }
)
async def create_bill(
    request: Request,
    body: CreateBillRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """
    Create or recompute the bill of a pending order.

    Prices the order's current items against the catalog. An existing
    unlocked bill is overwritten; `created` tells which happened.
    """
    use_case = UpsertBill(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        build_bill_repository(session, request.app.state.config),
        SqlAlchemyProductRepository(session),
    )
    result = await use_case.execute(UpsertBillCommandDTO(order_id=body.order_id, actor=actor))

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=List[BillResponseDTO])
async def list_bills(
    request: Request,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await ListBills(build_bill_repository(session, request.app.state.config)).execute(
        limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/distributor/{distributor_id}", response_model=List[BillResponseDTO])
async def list_distributor_bills(
    request: Request,
    distributor_id: int,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await ListBills(build_bill_repository(session, request.app.state.config)).execute(
        distributor_id=distributor_id, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value
