"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for Payment persistence"""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """Create a new payment record"""
        pass

    @abstractmethod
    async def list_payments(
        self,
        distributor_id: Optional[int] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Payment]:
        """List payments, newest first, optionally for one distributor"""
        pass
