"""Order Repository Interface

Defines the contract for order persistence operations. Every state change
that must respect the ``locked`` gate is a conditional write that reports
whether it applied.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from src.domain.actor import Actor, ActorKind
from src.domain.order import Order, OrderItem, OrderDamagedItem, OrderStatus


class OrderRepository(ABC):
    """
    Repository interface for Order persistence

    Reads always return the current row state (no stale identity-map copies),
    so a re-check after a failed conditional write sees what won.
    """

    @abstractmethod
    async def create(self, order: Order, items: List[OrderItem]) -> Order:
        """
        Create an order together with its items

        Args:
            order: Order entity to persist
            items: Line items (order_id is filled in)

        Returns:
            Created Order with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order ID

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_items(self, order_id: int) -> List[OrderItem]:
        """Retrieve the line items of an order"""
        pass

    @abstractmethod
    async def get_damaged_items(self, order_id: int) -> List[OrderDamagedItem]:
        """Retrieve the damaged items recorded at settlement"""
        pass

    @abstractmethod
    async def list_orders(
        self,
        placed_by_kind: Optional[ActorKind] = None,
        placed_by_id: Optional[int] = None,
        distributor_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        order_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Order]:
        """
        List orders, newest first, with optional filters

        Args:
            placed_by_kind / placed_by_id: Only orders placed by this actor
            distributor_id: Only orders for this distributor
            status: Only orders in this status
            order_date: Only orders for this date
            limit: Maximum number of orders to return
            offset: Offset for pagination

        Returns:
            List of orders
        """
        pass

    @abstractmethod
    async def update_if_unlocked(
        self,
        order_id: int,
        expected_version: int,
        order_date: Optional[date],
        updated_by: Actor,
    ) -> bool:
        """
        Apply an edit if the order is still unlocked and at expected_version

        Bumps version and stamps updated_by/updated_at.

        Returns:
            True if the row was updated, False if the gate rejected it
        """
        pass

    @abstractmethod
    async def replace_items(self, order_id: int, items: List[OrderItem]) -> None:
        """Replace all line items of an order"""
        pass

    @abstractmethod
    async def delete_if_unlocked(self, order_id: int) -> bool:
        """
        Delete an order (and its items) if it is still unlocked

        Returns:
            True if deleted, False if the order is missing or locked
        """
        pass

    @abstractmethod
    async def claim_for_delivery(
        self,
        order_id: int,
        expected_version: int,
        damaged_items: List[OrderDamagedItem],
        total_damaged_cost: Decimal,
        final_bill_amount: Decimal,
        updated_by: Actor,
        delivered_at: datetime,
    ) -> bool:
        """
        Atomically move a pending order to delivered/locked

        Single conditional write:
        ``SET status=delivered, locked=true ... WHERE id=? AND locked=false
        AND status=pending AND version=?``. Damaged items are only stored
        when the claim wins.

        Returns:
            True if this call claimed the order, False otherwise
        """
        pass
