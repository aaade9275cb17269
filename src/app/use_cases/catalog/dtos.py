"""Data Transfer Objects for catalog and distributor maintenance"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field
from src.app.use_cases.base_dto import CamelModel
from src.domain.distributor import DistributorStatus
from src.domain.product import ProductUnit


class CreateProductCommandDTO(CamelModel):
    """
    Command DTO for adding a product to the catalog

    Either ``cost_per_tub`` or ``cost_per_packet`` + ``packets_per_tub``
    prices the product; both may be given.
    """

    company: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0, description="Pack size in `unit`")
    unit: ProductUnit
    image_url: Optional[str] = None
    cost_per_tub: Optional[Decimal] = Field(default=None, ge=0)
    cost_per_packet: Optional[Decimal] = Field(default=None, ge=0)
    packets_per_tub: Optional[int] = Field(default=None, gt=0)


class ProductResponseDTO(CamelModel):
    product_id: int
    company: str
    name: str
    quantity: Decimal
    unit: ProductUnit
    image_url: Optional[str] = None
    cost_per_tub: Optional[Decimal] = None
    cost_per_packet: Optional[Decimal] = None
    packets_per_tub: Optional[int] = None
    created_at: datetime


class CreateDistributorCommandDTO(CamelModel):
    distributor_name: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1)
    contact: Optional[str] = None
    username: str = Field(..., min_length=1)
    status: DistributorStatus = DistributorStatus.ACTIVE


class DistributorResponseDTO(CamelModel):
    distributor_id: int
    distributor_name: str
    company_name: str
    contact: Optional[str] = None
    username: str
    status: DistributorStatus
    wallet_balance: Decimal
    created_at: datetime
