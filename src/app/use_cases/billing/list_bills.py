"""ListBills Use Case

Lists bills with their lines, newest first.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from .bill_ledger import to_bill_response
from .dtos import BillResponseDTO


class ListBills:
    """
    List Bills Use Case

    Read-only; optionally restricted to one distributor.
    """

    def __init__(self, bill_repo: BillRepository):
        self.bill_repo = bill_repo

    async def execute(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[list[BillResponseDTO]]:
        try:
            bills = await self.bill_repo.list_bills(
                distributor_id=distributor_id, limit=limit, offset=offset
            )
            responses = []
            for bill in bills:
                lines = await self.bill_repo.get_lines(bill.id)
                responses.append(to_bill_response(bill, lines))
            return Return.ok(responses)

        except Exception as e:
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to fetch bills",
                    reason=str(e),
                )
            )
