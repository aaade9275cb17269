"""Order API Routes

FastAPI routes for placing, editing and settling orders.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import require_back_office
from src.api.error import ClientError
from src.api.schemas.order_request import (
    CreateOrderRequestSchema,
    DeliverRequestSchema,
    UpdateOrderRequestSchema,
)
from src.app.use_cases.billing.dtos import DamagedDeclarationDTO
from src.app.use_cases.orders import (
    CreateOrder,
    UpdateOrder,
    DeleteOrder,
    SettleDelivery,
    ListOrders,
    ListTomorrowOrders,
)
from src.app.use_cases.orders.dtos import (
    CreateOrderCommandDTO,
    UpdateOrderCommandDTO,
    DeleteOrderCommandDTO,
    SettleDeliveryCommandDTO,
    OrderItemDTO,
    OrderResponseDTO,
    SettlementResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyDistributorRepository,
    SqlAlchemyAdminRepository,
    SqlAlchemyStaffRepository,
)
from src.adapter.services.notification_service import create_notification_service
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import build_bill_repository, get_session
from src.domain.actor import Actor
from src.domain.order import OrderStatus

router = APIRouter(prefix="/orders", tags=["Orders"])


def _error_example(code: str, message: str) -> dict:
    return {"content": {"application/json": {"example": {"error": {"code": code, "message": message}}}}}


def _list_orders(session: AsyncSession) -> ListOrders:
    return ListOrders(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyAdminRepository(session),
        SqlAlchemyStaffRepository(session),
    )


def _to_items(items) -> Optional[List[OrderItemDTO]]:
    if items is None:
        return None
    return [
        OrderItemDTO(product_id=item.product_id, quantity=item.quantity, unit=item.unit)
        for item in items
    ]


@router.post(
    "",
    response_model=OrderResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            **_error_example("VALIDATION_ERROR", "Orders can only be placed from tomorrow onwards"),
        },
        404: {
            "description": "Distributor or product not found",
            **_error_example("PRODUCT_NOT_FOUND", "Invalid productId at index 0"),
        },
    },
)
async def create_order(
    request: Request,
    body: CreateOrderRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """
    Place a pending order for a distributor.

    The order date must be tomorrow or later. A draft bill is written
    alongside and is finalized when the order is delivered.
    """
    uow = SqlAlchemyUnitOfWork(session)
    command = CreateOrderCommandDTO(
        distributor_id=body.distributor_id,
        order_date=body.order_date,
        items=_to_items(body.items),
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        actor=actor,
    )

    use_case = CreateOrder(
        uow,
        SqlAlchemyOrderRepository(session),
        build_bill_repository(session, request.app.state.config),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDistributorRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=List[OrderResponseDTO])
async def list_orders(
    status_filter: Optional[OrderStatus] = Query(default=None, alias="status"),
    order_date: Optional[date] = Query(default=None, alias="orderDate"),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """List all orders, newest first, with the placer resolved."""
    result = await _list_orders(session).execute(
        status=status_filter, order_date=order_date, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/mine", response_model=List[OrderResponseDTO])
async def list_my_orders(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """List orders placed by the acting admin/staff."""
    result = await _list_orders(session).execute(
        placed_by_kind=actor.kind, placed_by_id=actor.id, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/distributor/{distributor_id}", response_model=List[OrderResponseDTO])
async def list_distributor_orders(
    distributor_id: int,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    result = await _list_orders(session).execute(
        distributor_id=distributor_id, limit=limit, offset=offset
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/distributor/{distributor_id}/tomorrow", response_model=List[OrderResponseDTO])
async def list_tomorrow_orders(
    distributor_id: int,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """Pending orders of a distributor due for delivery tomorrow."""
    use_case = ListTomorrowOrders(
        SqlAlchemyOrderRepository(session),
        SqlAlchemyAdminRepository(session),
        SqlAlchemyStaffRepository(session),
    )
    result = await use_case.execute_for(distributor_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.put(
    "/{order_id}",
    response_model=OrderResponseDTO,
    responses={
        403: {
            "description": "Order locked or not owned",
            **_error_example("ORDER_LOCKED", "Order is locked and cannot be updated"),
        },
        404: {"description": "Order not found", **_error_example("ORDER_NOT_FOUND", "Order 5 not found")},
    },
)
async def update_order(
    request: Request,
    order_id: int,
    body: UpdateOrderRequestSchema,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """
    Edit the date and/or items of a pending order.

    Locked (delivered) orders are rejected with 403.
    """
    command = UpdateOrderCommandDTO(
        order_id=order_id,
        order_date=body.order_date,
        items=_to_items(body.items),
        actor=actor,
    )
    use_case = UpdateOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        build_bill_repository(session, request.app.state.config),
        SqlAlchemyProductRepository(session),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete(
    "/{order_id}",
    responses={
        403: {
            "description": "Order locked or not owned",
            **_error_example("ORDER_LOCKED", "Order is locked and cannot be deleted"),
        },
    },
)
async def delete_order(
    request: Request,
    order_id: int,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    use_case = DeleteOrder(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        build_bill_repository(session, request.app.state.config),
    )
    result = await use_case.execute(DeleteOrderCommandDTO(order_id=order_id, actor=actor))

    if result.is_err():
        raise ClientError(result.error)
    return {"message": "Order deleted successfully", "orderId": result.value}


@router.post(
    "/{order_id}/deliver",
    response_model=SettlementResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Already delivered, no items or no distributor",
            **_error_example("ALREADY_SETTLED", "Order 31 has already been delivered"),
        },
        404: {"description": "Order not found", **_error_example("ORDER_NOT_FOUND", "Order 31 not found")},
        500: {
            "description": "Persistence failure",
            **_error_example("PERSISTENCE_FAILURE", "Failed to settle delivery"),
        },
    },
)
async def deliver_order(
    request: Request,
    order_id: int,
    body: Optional[DeliverRequestSchema] = None,
    actor: Actor = Depends(require_back_office),
    session: AsyncSession = Depends(get_session),
):
    """
    Mark an order delivered and settle it.

    Computes the final bill (items minus declared damaged packets), locks
    the order and its bill, and credits the distributor's wallet with the
    final amount exactly once. Repeated calls return 400 ALREADY_SETTLED.

    **Example request:**
    ```json
    {
      "damagedProducts": [{"productId": 2, "damagedQuantity": 1}],
      "updatedBy": {"role": "staff", "id": 7, "name": "Anil"}
    }
    ```
    """
    body = body or DeliverRequestSchema()
    config = request.app.state.config

    command = SettleDeliveryCommandDTO(
        order_id=order_id,
        damaged_products=[
            DamagedDeclarationDTO(product_id=d.product_id, damaged_quantity=d.damaged_quantity)
            for d in body.damaged_products
        ],
        actor=actor,
        updated_by=body.updated_by,
    )

    use_case = SettleDelivery(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyOrderRepository(session),
        build_bill_repository(session, config),
        SqlAlchemyProductRepository(session),
        SqlAlchemyDistributorRepository(session),
        notification_service=create_notification_service(config.SETTLEMENT_ALERT_WEBHOOK),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)
    return result.value
