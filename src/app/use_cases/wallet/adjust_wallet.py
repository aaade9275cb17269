"""CreditWallet / DebitWallet Use Cases

Manual administrative wallet adjustments, independent of settlement.
Both are single atomic storage-level updates.
"""

import logging
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.distributor_repository import DistributorRepository
from src.domain.base import to_money
from .dtos import WalletAdjustmentCommandDTO, WalletResponseDTO

logger = logging.getLogger(__name__)


def check_amount(amount: Decimal) -> Optional[Error]:
    if amount <= 0:
        return Error(
            code="VALIDATION_ERROR",
            message="Amount must be greater than zero",
            reason=f"amount={amount}",
        )
    return None


class CreditWallet:
    """
    Use Case: Credit a distributor wallet

    Business Rules:
    1. amount > 0
    2. Distributor must exist
    3. balance = balance + amount as one atomic statement
    """

    def __init__(self, uow: UnitOfWork, distributor_repo: DistributorRepository):
        self.uow = uow
        self.distributor_repo = distributor_repo

    async def execute(self, command: WalletAdjustmentCommandDTO) -> Result[WalletResponseDTO]:
        amount_error = check_amount(command.amount)
        if amount_error:
            return Return.err(amount_error)

        amount = to_money(command.amount)
        try:
            balance = await self.distributor_repo.increment_balance(
                command.distributor_id, amount
            )
            if balance is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="DISTRIBUTOR_NOT_FOUND",
                        message=f"Distributor {command.distributor_id} not found",
                    )
                )

            distributor = await self.distributor_repo.get_by_id(command.distributor_id)
            response = WalletResponseDTO(
                distributor_id=distributor.id,
                distributor_name=distributor.distributor_name,
                wallet_balance=balance,
                updated_at=distributor.updated_at,
            )
            await self.uow.commit()

            logger.info(f"Wallet of distributor {command.distributor_id} credited {amount}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to credit wallet",
                    reason=str(e),
                )
            )


class DebitWallet:
    """
    Use Case: Debit a distributor wallet

    Business Rules:
    1. amount > 0
    2. Distributor must exist
    3. Balance must cover the amount; the check and the decrement are one
       conditional statement (WHERE wallet_balance >= amount)
    """

    def __init__(self, uow: UnitOfWork, distributor_repo: DistributorRepository):
        self.uow = uow
        self.distributor_repo = distributor_repo

    async def execute(self, command: WalletAdjustmentCommandDTO) -> Result[WalletResponseDTO]:
        amount_error = check_amount(command.amount)
        if amount_error:
            return Return.err(amount_error)

        amount = to_money(command.amount)
        try:
            distributor = await self.distributor_repo.get_by_id(command.distributor_id)
            if not distributor:
                return Return.err(
                    Error(
                        code="DISTRIBUTOR_NOT_FOUND",
                        message=f"Distributor {command.distributor_id} not found",
                    )
                )

            balance = await self.distributor_repo.decrement_balance_if_sufficient(
                command.distributor_id, amount
            )
            if balance is None:
                await self.uow.rollback()
                return Return.err(insufficient_funds(command.distributor_id, amount))

            distributor = await self.distributor_repo.get_by_id(command.distributor_id)
            response = WalletResponseDTO(
                distributor_id=distributor.id,
                distributor_name=distributor.distributor_name,
                wallet_balance=balance,
                updated_at=distributor.updated_at,
            )
            await self.uow.commit()

            logger.info(f"Wallet of distributor {command.distributor_id} debited {amount}")
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to debit wallet",
                    reason=str(e),
                )
            )


def insufficient_funds(distributor_id: int, amount: Decimal) -> Error:
    return Error(
        code="INSUFFICIENT_FUNDS",
        message="Insufficient wallet balance",
        reason=f"distributor {distributor_id} cannot cover {amount}",
    )
