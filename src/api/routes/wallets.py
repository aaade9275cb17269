"""Wallet API Routes

Balance reads and manual administrative adjustments. Settlement credits do
not go through these endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import require_back_office
from src.api.error import ClientError
from src.api.schemas.wallet_request import WalletAdjustmentRequestSchema
from src.app.use_cases.wallet import GetWallet, CreditWallet, DebitWallet
from src.app.use_cases.wallet.dtos import WalletAdjustmentCommandDTO, WalletResponseDTO
from src.adapter.repositories import SqlAlchemyDistributorRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.domain.actor import Actor

router = APIRouter(prefix="/wallets", tags=["Wallets"])


@router.get(
    "/{distributor_id}",
    response_model=WalletResponseDTO,
    responses={
        404: {
            "description": "Distributor not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DISTRIBUTOR_NOT_FOUND",
                            "message": "Distributor 9 not found"
                        }
                    }
                }
            }
        }
    }
)
async def get_wallet(
    distributor_id: int,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await GetWallet(SqlAlchemyDistributorRepository(session)).execute(distributor_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{distributor_id}/credit", response_model=WalletResponseDTO, status_code=status.HTTP_200_OK)
async def credit_wallet(
    distributor_id: int,
    body: WalletAdjustmentRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """Manually add `amount` to a distributor's wallet."""
    use_case = CreditWallet(SqlAlchemyUnitOfWork(session), SqlAlchemyDistributorRepository(session))
    result = await use_case.execute(
        WalletAdjustmentCommandDTO(distributor_id=distributor_id, amount=body.amount)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/{distributor_id}/debit",
    response_model=WalletResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_FUNDS",
                            "message": "Insufficient wallet balance"
                        }
                    }
                }
            }
        }
    }
)
async def debit_wallet(
    distributor_id: int,
    body: WalletAdjustmentRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """Manually subtract `amount`; rejected when the balance cannot cover it."""
    use_case = DebitWallet(SqlAlchemyUnitOfWork(session), SqlAlchemyDistributorRepository(session))
    result = await use_case.execute(
        WalletAdjustmentCommandDTO(distributor_id=distributor_id, amount=body.amount)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value
