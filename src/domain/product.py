"""Product Domain Entity

Catalog entry with the unit economics used for billing. Products are sold
by the tub; damaged goods are reported by the packet.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Integer, Numeric, String
from src.domain.base import BaseModel, IdType


class ProductUnit(str, Enum):
    """Unit of the packet size"""
    ML = "ml"
    KG = "kg"
    GM = "gm"


class Product(BaseModel, table=True):
    """
    Product - Catalog entry with cost fields

    Domain Rules:
    - cost_per_tub should equal cost_per_packet * packets_per_tub when
      both are populated
    - Either may be missing; billing falls back to the derived tub cost
    """

    __tablename__ = "products"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique product identifier (auto-increment)"
    )

    company: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Manufacturer / brand"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Product name"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Packet size, in `unit`"
    )

    unit: ProductUnit = Field(
        description="Packet size unit (ml, kg, gm)"
    )

    image_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Image location (uploaded elsewhere)"
    )

    cost_per_tub: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(12, 2), nullable=True),
        description="Direct cost of one tub"
    )

    cost_per_packet: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(12, 2), nullable=True),
        description="Cost of one packet"
    )

    packets_per_tub: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Number of packets in a tub"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )
