"""Bill Domain Entities

A bill is derived from exactly one order. It is computed (and may be
recomputed) while the order is pending, then locked by the settlement.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.actor import ActorKind
from src.domain.base import BaseModel, IdType


class BillStatus(str, Enum):
    """Bill status types"""
    PENDING = "pending"
    COMPLETED = "completed"


class BillLineType(str, Enum):
    """Kind of bill line"""
    ITEM = "item"
    DAMAGED = "damaged"


class Bill(BaseModel, table=True):
    """
    Bill - Amount owed for one order

    Domain Rules:
    - One bill per order (order_id is unique)
    - bill_number is unique
    - total_amount = max(subtotal - total_damaged_cost, 0), never negative
    - Immutable once locked
    """

    __tablename__ = "bills"
    __table_args__ = (
        Index('ix_bills_distributor_id', 'distributor_id'),
        Index('ix_bills_order_id', 'order_id', unique=True),
        Index('ix_bills_bill_number', 'bill_number', unique=True),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique bill identifier (auto-increment)"
    )

    bill_number: str = Field(
        sa_column=Column(String(50), nullable=False, unique=True),
        description="Human readable bill number (e.g., BILL-20240101-0042)"
    )

    distributor_id: int = Field(
        sa_column=Column(IdType, ForeignKey("distributors.id"), nullable=False),
    )

    order_id: int = Field(
        sa_column=Column(IdType, ForeignKey("orders.id"), nullable=False, unique=True),
    )

    bill_date: datetime = Field(default_factory=datetime.utcnow)

    customer_name: str = Field(
        default="Customer",
        sa_column=Column(String(255), nullable=False, default="Customer"),
    )

    customer_phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(30), nullable=True),
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Sum of item line totals"
    )

    total_damaged_cost: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Sum of damaged line totals"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="max(subtotal - total_damaged_cost, 0)"
    )

    payment_method: str = Field(
        default="pending",
        sa_column=Column(String(50), nullable=False, default="pending"),
    )

    status: BillStatus = Field(default=BillStatus.PENDING)

    locked: bool = Field(default=False)

    updated_by_kind: Optional[ActorKind] = Field(default=None)

    updated_by_id: Optional[int] = Field(default=None)

    updated_by_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)

    updated_at: datetime = Field(default_factory=datetime.utcnow)


class BillLine(BaseModel, table=True):
    """
    Bill Line - Item or damaged-goods line of a bill

    Domain Rules:
    - total = quantity * price
    - Damaged lines are always priced per packet
    """

    __tablename__ = "bill_lines"
    __table_args__ = (
        Index('ix_bill_lines_bill_id', 'bill_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    bill_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("bills.id", ondelete="CASCADE"), nullable=False),
    )

    line_type: BillLineType = Field(default=BillLineType.ITEM)

    product_id: int = Field(sa_column=Column(IdType, nullable=False))

    product_name: str = Field(sa_column=Column(String(255), nullable=False))

    quantity: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    unit: str = Field(sa_column=Column(String(30), nullable=False))

    price: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    total: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
