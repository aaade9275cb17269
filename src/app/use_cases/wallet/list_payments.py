"""ListPayments Use Case"""

from typing import List, Optional
from libs.result import Result, Return, Error
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import PaymentResponseDTO
from .mappers import to_payment_response


class ListPayments:
    """Read-only listing of payments, newest first"""

    def __init__(self, payment_repo: PaymentRepository):
        self.payment_repo = payment_repo

    async def execute(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[List[PaymentResponseDTO]]:
        try:
            payments = await self.payment_repo.list_payments(
                distributor_id=distributor_id, limit=limit, offset=offset
            )
            return Return.ok([to_payment_response(payment) for payment in payments])

        except Exception as e:
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to fetch payments",
                    reason=str(e),
                )
            )
