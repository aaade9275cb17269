"""Notification Service Interface

Defines the contract for alerting about settlement inconsistencies:
failures that happen after a wallet credit statement has already run.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional


class NotificationService(ABC):
    """
    Abstract notification service for sending alerts

    Implementations can send notifications via:
    - Log records
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_settlement_alert(
        self,
        order_id: int,
        distributor_id: Optional[int],
        amount: Decimal,
        reason: str,
    ) -> bool:
        """
        Send alert for a settlement that failed after crediting

        Args:
            order_id: Order being settled
            distributor_id: Distributor whose wallet was credited
            amount: Credited amount
            reason: Failure description

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
