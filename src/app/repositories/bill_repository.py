"""Bill Repository Interface

Defines the contract for bill persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from src.domain.bill import Bill, BillLine


class BillRepository(ABC):
    """
    Repository interface for Bill persistence

    Bills are keyed by order (at most one per order).
    """

    @abstractmethod
    async def create(self, bill: Bill) -> Bill:
        """
        Create a new bill

        Args:
            bill: Bill entity to persist

        Returns:
            Created Bill with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, bill_id: int) -> Optional[Bill]:
        """Retrieve bill by ID"""
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: int) -> Optional[Bill]:
        """Retrieve the bill of an order, if any"""
        pass

    @abstractmethod
    async def get_lines(self, bill_id: int) -> List[BillLine]:
        """Retrieve item and damaged lines of a bill"""
        pass

    @abstractmethod
    async def update_if_unlocked(self, bill_id: int, values: Dict[str, Any]) -> Optional[Bill]:
        """
        Overwrite columns of a bill only while it is unlocked

        Single conditional write (locked = false); a bill locked by a
        concurrent settlement is left untouched.

        Args:
            bill_id: Bill to update
            values: Column values to set

        Returns:
            Updated Bill, or None when the bill is missing or locked
        """
        pass

    @abstractmethod
    async def replace_lines(self, bill_id: int, lines: List[BillLine]) -> None:
        """Replace all lines of a bill"""
        pass

    @abstractmethod
    async def delete_unlocked_for_order(self, order_id: int) -> bool:
        """
        Delete the bill of an order (and its lines) unless it is locked

        Returns:
            True if a bill was deleted
        """
        pass

    @abstractmethod
    async def list_bills(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Bill]:
        """List bills, newest first, optionally for one distributor"""
        pass

    @abstractmethod
    async def generate_bill_number(self) -> str:
        """
        Generate an unused bill number

        Format: BILL-YYYYMMDD-NNNN (random disambiguator)

        Returns:
            Unique bill number string
        """
        pass
