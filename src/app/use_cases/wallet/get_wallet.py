"""Get Wallet Use Case

Retrieves a distributor's current wallet balance.
"""

from libs.result import Result, Return, Error
from src.app.repositories.distributor_repository import DistributorRepository
from .dtos import WalletResponseDTO


class GetWallet:
    """
    Get Wallet Use Case

    Read-only operation returning the balance of one distributor.
    """

    def __init__(self, distributor_repo: DistributorRepository):
        self.distributor_repo = distributor_repo

    async def execute(self, distributor_id: int) -> Result[WalletResponseDTO]:
        """
        Execute get wallet operation

        Args:
            distributor_id: The distributor identifier

        Returns:
            Result[WalletResponseDTO]: Success with balance data or error

        Errors:
            DISTRIBUTOR_NOT_FOUND: No such distributor
        """
        distributor = await self.distributor_repo.get_by_id(distributor_id)

        if not distributor:
            return Return.err(
                Error(
                    code="DISTRIBUTOR_NOT_FOUND",
                    message=f"Distributor {distributor_id} not found",
                )
            )

        return Return.ok(
            WalletResponseDTO(
                distributor_id=distributor.id,
                distributor_name=distributor.distributor_name,
                wallet_balance=distributor.wallet_balance,
                updated_at=distributor.updated_at,
            )
        )
