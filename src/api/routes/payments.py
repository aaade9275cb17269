"""Payment API Routes"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import require_back_office
from src.api.error import ClientError
from src.api.schemas.wallet_request import RecordPaymentRequestSchema
from src.app.use_cases.wallet import RecordPayment, ListPayments
from src.app.use_cases.wallet.dtos import PaymentResponseDTO, RecordPaymentCommandDTO
from src.adapter.repositories import SqlAlchemyDistributorRepository, SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.domain.actor import Actor

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=PaymentResponseDTO, status_code=status.HTTP_201_CREATED)
async def record_payment(
    body: RecordPaymentRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """
    Record a distributor payment.

    The wallet is debited by `amount` in the same transaction; a balance
    that cannot cover it returns 400 INSUFFICIENT_FUNDS.
    """
    command = RecordPaymentCommandDTO(
        distributor_id=body.distributor_id,
        payment_method=body.payment_method,
        amount=body.amount,
        receipt_image_url=body.receipt_image_url,
        payment_date=body.payment_date,
        actor=actor,
    )
    use_case = RecordPayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyDistributorRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=List[PaymentResponseDTO])
async def list_payments(
    distributor_id: Optional[int] = Query(default=None, alias="distributorId"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await ListPayments(SqlAlchemyPaymentRepository(session)).execute(
        distributor_id=distributor_id, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value
