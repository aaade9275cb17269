"""ListOrders Use Case

Lists orders with their items, resolving each placer reference to the
admin or staff record it points at.
"""

from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple
from libs.result import Result, Return, Error
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.user_repository import UserRepository
from src.domain.actor import ActorKind
from src.domain.order import Order, OrderStatus
from .dtos import OrderResponseDTO, PlacedByDTO
from .mappers import to_order_response


class ListOrders:
    """
    Use Case: List orders

    Placer references are tagged (kind, id); each kind resolves through its
    own repository. Unknown kinds or missing records keep the bare reference.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        admin_repo: UserRepository,
        staff_repo: UserRepository,
    ):
        self.order_repo = order_repo
        self.user_repos: Dict[ActorKind, UserRepository] = {
            ActorKind.ADMIN: admin_repo,
            ActorKind.STAFF: staff_repo,
        }

    async def execute(
        self,
        placed_by_kind: Optional[ActorKind] = None,
        placed_by_id: Optional[int] = None,
        distributor_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        order_date: Optional[date] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[List[OrderResponseDTO]]:
        try:
            orders = await self.order_repo.list_orders(
                placed_by_kind=placed_by_kind,
                placed_by_id=placed_by_id,
                distributor_id=distributor_id,
                status=status,
                order_date=order_date,
                limit=limit,
                offset=offset,
            )

            placers: Dict[Tuple[ActorKind, int], PlacedByDTO] = {}
            responses = []
            for order in orders:
                key = (order.placed_by_kind, order.placed_by_id)
                if key not in placers:
                    placers[key] = await self._resolve_placer(order)

                items = await self.order_repo.get_items(order.id)
                damaged = await self.order_repo.get_damaged_items(order.id)
                responses.append(to_order_response(order, items, damaged, placers[key]))

            return Return.ok(responses)

        except Exception as e:
            return Return.err(
                Error(
                    code="PERSISTENCE_FAILURE",
                    message="Failed to list orders",
                    reason=str(e),
                )
            )

    async def _resolve_placer(self, order: Order) -> PlacedByDTO:
        placed_by = PlacedByDTO(kind=order.placed_by_kind, id=order.placed_by_id)
        repo = self.user_repos.get(order.placed_by_kind)
        if repo is None:
            return placed_by

        user = await repo.get_by_id(order.placed_by_id)
        if user is None:
            return placed_by

        placed_by.username = user.username
        placed_by.name = user.display_name
        return placed_by


class ListTomorrowOrders(ListOrders):
    """Use Case: pending orders of a distributor due tomorrow"""

    def __init__(
        self,
        order_repo: OrderRepository,
        admin_repo: UserRepository,
        staff_repo: UserRepository,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(order_repo, admin_repo, staff_repo)
        self.today = today

    async def execute_for(self, distributor_id: int) -> Result[List[OrderResponseDTO]]:
        return await self.execute(
            distributor_id=distributor_id,
            status=OrderStatus.PENDING,
            order_date=self.today() + timedelta(days=1),
            limit=500,
        )
