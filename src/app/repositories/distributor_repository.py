"""Distributor Repository Interface

Defines the contract for distributor persistence, including the wallet
balance mutations. Balance changes are storage-level atomic increments;
there is no load-modify-save path.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional
from src.domain.distributor import Distributor


class DistributorRepository(ABC):
    """Repository interface for Distributor persistence"""

    @abstractmethod
    async def create(self, distributor: Distributor) -> Distributor:
        """Create a new distributor"""
        pass

    @abstractmethod
    async def get_by_id(self, distributor_id: int) -> Optional[Distributor]:
        """Retrieve distributor by ID (current row state)"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Distributor]:
        """Retrieve distributor by username"""
        pass

    @abstractmethod
    async def list_distributors(self, limit: int = 50, offset: int = 0) -> List[Distributor]:
        """List distributors"""
        pass

    @abstractmethod
    async def increment_balance(self, distributor_id: int, amount: Decimal) -> Optional[Decimal]:
        """
        Atomically add amount to the wallet balance

        Args:
            distributor_id: Distributor ID
            amount: Amount to add

        Returns:
            New balance, or None if the distributor does not exist
        """
        pass

    @abstractmethod
    async def decrement_balance_if_sufficient(
        self, distributor_id: int, amount: Decimal
    ) -> Optional[Decimal]:
        """
        Atomically subtract amount if balance >= amount

        Returns:
            New balance, or None if the distributor is missing or the
            balance is insufficient
        """
        pass
