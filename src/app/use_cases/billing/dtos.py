"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs, computation results and responses.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import ConfigDict, Field
from src.app.use_cases.base_dto import CamelModel
from src.domain.actor import Actor


class DamagedDeclarationDTO(CamelModel):
    """
    Damaged goods declared at delivery

    Quantity is in packets, not tubs.
    """

    product_id: int = Field(
        ...,
        description="Damaged product"
    )

    damaged_quantity: int = Field(
        ...,
        ge=0,
        description="Damaged packets (0 entries are ignored)"
    )


class BillLineDTO(CamelModel):
    """One computed bill line (order item or damaged goods)"""

    product_id: int
    product_name: str
    quantity: Decimal
    unit: str
    price: Decimal
    total: Decimal


class BillComputationDTO(CamelModel):
    """
    Result of the bill computation

    total_amount = max(subtotal - total_damaged_cost, 0)
    """

    items: List[BillLineDTO] = Field(default_factory=list)
    damaged_items: List[BillLineDTO] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0.00")
    total_damaged_cost: Decimal = Decimal("0.00")
    total_amount: Decimal = Decimal("0.00")


class UpsertBillCommandDTO(CamelModel):
    """Command DTO for creating/recomputing the bill of a pending order"""

    order_id: int = Field(..., description="Order to bill")
    actor: Actor = Field(..., description="Acting identity")


class BillResponseDTO(CamelModel):
    """
    Response DTO for bill operations

    Returned by UpsertBill and ListBills.
    """

    bill_id: int
    bill_number: str
    order_id: int
    distributor_id: int
    bill_date: datetime
    customer_name: str
    customer_phone: Optional[str] = None
    items: List[BillLineDTO] = Field(default_factory=list)
    damaged_products: List[BillLineDTO] = Field(default_factory=list)
    subtotal: Decimal
    total_damaged_cost: Decimal
    total_amount: Decimal
    payment_method: str
    status: str
    locked: bool
    updated_by: Optional[Actor] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "billId": 12,
                "billNumber": "BILL-20240101-0042",
                "orderId": 31,
                "distributorId": 4,
                "billDate": "2024-01-01T08:00:00",
                "customerName": "Customer",
                "items": [
                    {
                        "productId": 2,
                        "productName": "Toned Milk 500ml",
                        "quantity": "2.00",
                        "unit": "tub",
                        "price": "100.00",
                        "total": "200.00",
                    }
                ],
                "damagedProducts": [],
                "subtotal": "200.00",
                "totalDamagedCost": "0.00",
                "totalAmount": "200.00",
                "paymentMethod": "pending",
                "status": "pending",
                "locked": False,
                "createdAt": "2024-01-01T08:00:00",
                "updatedAt": "2024-01-01T08:00:00",
            }
        }
    )


class UpsertBillResponseDTO(CamelModel):
    """Bill plus whether this call created it"""

    bill: BillResponseDTO
    created: bool
