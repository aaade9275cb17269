"""Request schemas for Order API

Bodies use camelCase keys (snake_case is accepted too).
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import ConfigDict, Field, field_validator
from src.app.use_cases.base_dto import CamelModel
from src.domain.actor import Actor


class OrderItemSchema(CamelModel):
    product_id: int = Field(..., description="Product identifier")

    quantity: Decimal = Field(
        ...,
        gt=0,
        max_digits=10,
        decimal_places=2,
        description="Quantity (must be > 0, at most 2 decimal places)"
    )

    unit: str = Field(default="tub", min_length=1, description="Unit, e.g. 'tub'")

    @field_validator("unit")
    @classmethod
    def strip_unit(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Unit is required")
        return v


class CreateOrderRequestSchema(CamelModel):
    """
    Request schema for placing an order

    Used for POST /orders endpoint.
    """

    distributor_id: int = Field(..., description="Distributor the order is for")

    order_date: date = Field(..., description="Delivery date, tomorrow or later")

    items: List[OrderItemSchema] = Field(..., description="Requested products")

    customer_name: Optional[str] = Field(default=None)

    customer_phone: Optional[str] = Field(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "distributorId": 1,
                "orderDate": "2024-01-02",
                "items": [
                    {"productId": 1, "quantity": "2", "unit": "tub"},
                    {"productId": 2, "quantity": "1", "unit": "tub"},
                ],
                "customerName": "Ravi Dairy Agency",
            }
        }
    )


class UpdateOrderRequestSchema(CamelModel):
    """Request schema for PUT /orders/{id}; omitted fields are unchanged"""

    order_date: Optional[date] = None
    items: Optional[List[OrderItemSchema]] = None


class DamagedProductSchema(CamelModel):
    product_id: int

    damaged_quantity: int = Field(..., ge=0, description="Damaged packets")


class DeliverRequestSchema(CamelModel):
    """
    Request schema for marking an order delivered

    Used for POST /orders/{id}/deliver endpoint.
    """

    damaged_products: List[DamagedProductSchema] = Field(default_factory=list)

    updated_by: Optional[Actor] = Field(
        default=None,
        description="Identity to stamp as updatedBy ({role, id, name})"
    )

    @field_validator("updated_by")
    @classmethod
    def back_office_updater(cls, v):
        if v is not None and not v.is_back_office:
            raise ValueError("updatedBy must be an admin or staff identity")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "damagedProducts": [{"productId": 2, "damagedQuantity": 1}],
                "updatedBy": {"role": "staff", "id": 7, "name": "Anil"},
            }
        }
    )
