"""RecordPayment Use Case

Records a payment made by a distributor and debits the wallet by the same
amount in one transaction.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.distributor_repository import DistributorRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.base import to_money
from src.domain.payment import Payment
from .adjust_wallet import check_amount, insufficient_funds
from .dtos import RecordPaymentCommandDTO, PaymentResponseDTO
from .mappers import to_payment_response

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a distributor payment

    Business Rules:
    1. amount > 0, receipt URL present
    2. Distributor must exist
    3. Wallet debit and payment row commit together
    4. Balance must cover the amount (INSUFFICIENT_FUNDS)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        distributor_repo: DistributorRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.distributor_repo = distributor_repo
        self.payment_repo = payment_repo

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[PaymentResponseDTO]:
        amount_error = check_amount(command.amount)
        if amount_error:
            return Return.err(amount_error)

        amount = to_money(command.amount)
        try:
            # Step 1: Distributor must exist
            distributor = await self.distributor_repo.get_by_id(command.distributor_id)
            if not distributor:
                return Return.err(
                    Error(
                        code="DISTRIBUTOR_NOT_FOUND",
                        message=f"Distributor {command.distributor_id} not found",
                    )
                )

            # Step 2: Conditional debit
            balance = await self.distributor_repo.decrement_balance_if_sufficient(
                command.distributor_id, amount
            )
            if balance is None:
                await self.uow.rollback()
                return Return.err(insufficient_funds(command.distributor_id, amount))

            # Step 3: Payment row
            payment = await self.payment_repo.create(
                Payment(
                    distributor_id=command.distributor_id,
                    payment_date=command.payment_date or datetime.utcnow(),
                    payment_method=command.payment_method,
                    amount=amount,
                    receipt_image_url=command.receipt_image_url,
                    created_by_kind=command.actor.kind,
                    created_by_id=command.actor.id,
                )
            )
            response = to_payment_response(payment, command.actor.name, balance)

            # Step 4: Commit
            await self.uow.commit()

            logger.info(
                f"Payment {response.payment_id} of {amount} recorded for distributor "
                f"{command.distributor_id} via {command.payment_method.value}"
            )
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
