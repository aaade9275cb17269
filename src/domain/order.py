"""Order Domain Entities

An order is placed by an admin or staff actor for a distributor and moves
through a single transition: pending (unlocked) -> delivered (locked).
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Date
from src.domain.actor import ActorKind
from src.domain.base import BaseModel, IdType


class OrderStatus(str, Enum):
    """Order status types"""
    PENDING = "pending"
    DELIVERED = "delivered"


class Order(BaseModel, table=True):
    """
    Order - Products requested for a distributor

    Domain Rules:
    - Created with status=pending, locked=False
    - status == delivered <=> locked == True (set together, exactly once,
      by one conditional write)
    - Items, date and damaged items only change while unlocked
    - Deleted only while unlocked
    - version increases on every edit; settlement claims a specific version
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_distributor_id', 'distributor_id'),
        Index('ix_orders_placed_by', 'placed_by_kind', 'placed_by_id'),
        Index('ix_orders_order_date', 'order_date'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique order identifier (auto-increment)"
    )

    placed_by_kind: ActorKind = Field(
        description="Kind of actor that placed the order (admin or staff)"
    )

    placed_by_id: int = Field(
        description="Identifier of the placing admin/staff record"
    )

    distributor_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("distributors.id"), nullable=True),
        description="Distributor the order is for"
    )

    customer_name: str = Field(
        default="Customer",
        sa_column=Column(String(255), nullable=False, default="Customer"),
    )

    customer_phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(30), nullable=True),
    )

    order_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Date the order is to be delivered on"
    )

    delivery_date: Optional[datetime] = Field(
        default=None,
        description="When the order was settled as delivered"
    )

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        description="Order status (pending, delivered)"
    )

    locked: bool = Field(
        default=False,
        description="True once delivered; blocks every further change"
    )

    version: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
        description="Optimistic concurrency counter"
    )

    total_damaged_cost: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
    )

    final_bill_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(12, 2), nullable=True),
        description="Amount credited to the wallet at settlement"
    )

    updated_by_kind: Optional[ActorKind] = Field(default=None)

    updated_by_id: Optional[int] = Field(default=None)

    updated_by_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Order creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def is_settled(self) -> bool:
        return self.locked or self.status == OrderStatus.DELIVERED


class OrderItem(BaseModel, table=True):
    """
    Order Item - One product line of an order

    Domain Rules:
    - quantity > 0 (in tubs)
    - Replaced wholesale when the order is edited
    """

    __tablename__ = "order_items"
    __table_args__ = (
        Index('ix_order_items_order_id', 'order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: int = Field(
        sa_column=Column(IdType, ForeignKey("products.id"), nullable=False),
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Quantity ordered, in `unit`"
    )

    unit: str = Field(
        default="tub",
        sa_column=Column(String(30), nullable=False, default="tub"),
    )


class OrderDamagedItem(BaseModel, table=True):
    """
    Order Damaged Item - Damaged packets declared at delivery

    Written once, by the settlement that locks the order.
    """

    __tablename__ = "order_damaged_items"
    __table_args__ = (
        Index('ix_order_damaged_items_order_id', 'order_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
    )

    product_id: int = Field(
        sa_column=Column(IdType, ForeignKey("products.id"), nullable=False),
    )

    product_name: str = Field(sa_column=Column(String(255), nullable=False))

    quantity: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Damaged packets"
    )

    unit: str = Field(default="packets", sa_column=Column(String(30), nullable=False, default="packets"))

    price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Cost per packet"
    )

    total: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="price * quantity"
    )
