"""Data Transfer Objects for Order Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import ConfigDict, Field, field_validator
from src.app.use_cases.base_dto import CamelModel
from src.app.use_cases.billing.dtos import BillLineDTO, DamagedDeclarationDTO
from src.domain.actor import Actor, ActorKind


class OrderItemDTO(CamelModel):
    """One requested product line"""

    product_id: int = Field(..., description="Product identifier")

    quantity: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Quantity in `unit` (must be > 0)"
    )

    unit: str = Field(..., min_length=1, description="Unit, e.g. 'tub'")


class CreateOrderCommandDTO(CamelModel):
    """
    Command DTO for placing an order

    Used as input to CreateOrder use case.
    """

    distributor_id: int = Field(..., description="Distributor the order is for")

    order_date: date = Field(..., description="Delivery date (tomorrow or later)")

    items: List[OrderItemDTO] = Field(..., description="Requested products")

    customer_name: Optional[str] = Field(default=None)

    customer_phone: Optional[str] = Field(default=None)

    actor: Actor = Field(..., description="Admin or staff placing the order")


class UpdateOrderCommandDTO(CamelModel):
    """
    Command DTO for editing a pending order

    Omitted fields keep their current value.
    """

    order_id: int
    order_date: Optional[date] = None
    items: Optional[List[OrderItemDTO]] = None
    actor: Actor


class DeleteOrderCommandDTO(CamelModel):
    order_id: int
    actor: Actor


class SettleDeliveryCommandDTO(CamelModel):
    """
    Command DTO for marking an order delivered

    Used as input to SettleDelivery use case. ``updated_by`` overrides the
    identity stamped on the order and bill (defaults to ``actor``).
    """

    order_id: int = Field(..., description="Order to settle")

    damaged_products: List[DamagedDeclarationDTO] = Field(
        default_factory=list,
        description="Damaged packets declared at delivery"
    )

    actor: Actor = Field(..., description="Acting admin or staff")

    updated_by: Optional[Actor] = Field(default=None)

    @field_validator("updated_by")
    @classmethod
    def back_office_updater(cls, v):
        if v is not None and not v.is_back_office:
            raise ValueError("updatedBy must be an admin or staff identity")
        return v


class OrderItemResponseDTO(CamelModel):
    product_id: int
    quantity: Decimal
    unit: str


class PlacedByDTO(CamelModel):
    """Resolved placer of an order"""

    kind: ActorKind
    id: int
    username: Optional[str] = None
    name: Optional[str] = None


class OrderResponseDTO(CamelModel):
    """Response DTO for order operations"""

    order_id: int
    distributor_id: Optional[int]
    placed_by: PlacedByDTO
    customer_name: str
    customer_phone: Optional[str] = None
    order_date: date
    delivery_date: Optional[datetime] = None
    status: str
    locked: bool
    items: List[OrderItemResponseDTO] = Field(default_factory=list)
    damaged_products: List[BillLineDTO] = Field(default_factory=list)
    total_damaged_cost: Decimal
    final_bill_amount: Optional[Decimal] = None
    updated_by: Optional[Actor] = None
    created_at: datetime
    updated_at: datetime


class SettlementResponseDTO(CamelModel):
    """
    Response DTO for a settled delivery

    Returned by SettleDelivery.
    """

    order_id: int
    bill_id: int
    credited_amount: Decimal
    wallet_balance: Decimal
    bill_generated: bool
    damaged_products: List[BillLineDTO] = Field(default_factory=list)
    total_damaged_cost: Decimal
    original_bill_amount: Decimal
    final_bill_amount: Decimal
    updated_by: Actor
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "orderId": 31,
                "billId": 12,
                "creditedAmount": "180.00",
                "walletBalance": "1430.00",
                "billGenerated": False,
                "damagedProducts": [
                    {
                        "productId": 2,
                        "productName": "Toned Milk 500ml",
                        "quantity": "1",
                        "unit": "packets",
                        "price": "20.00",
                        "total": "20.00",
                    }
                ],
                "totalDamagedCost": "20.00",
                "originalBillAmount": "200.00",
                "finalBillAmount": "180.00",
                "updatedBy": {"role": "staff", "id": 7, "name": "Anil"},
                "updatedAt": "2024-01-02T07:30:00",
            }
        }
    )
