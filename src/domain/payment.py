"""Payment Domain Entity

A payment made by a distributor; recording it debits the wallet.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.actor import ActorKind
from src.domain.base import BaseModel, IdType


class PaymentMethod(str, Enum):
    """Accepted payment methods"""
    PHONEPE = "PhonePe"
    GOOGLE_PAY = "Google Pay"
    CASH = "Cash"
    NET_BANKING = "Net Banking"
    BANK_TRANSFER = "Bank Transfer"


class Payment(BaseModel, table=True):
    """
    Payment - Money received from a distributor

    Domain Rules:
    - amount > 0
    - Created in the same transaction as the wallet debit
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_distributor_id', 'distributor_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    distributor_id: int = Field(
        sa_column=Column(IdType, ForeignKey("distributors.id"), nullable=False),
    )

    payment_date: datetime = Field(default_factory=datetime.utcnow)

    payment_method: PaymentMethod = Field(description="How the distributor paid")

    amount: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    receipt_image_url: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Receipt location (uploaded elsewhere)"
    )

    created_by_kind: ActorKind = Field()

    created_by_id: int = Field()

    created_at: datetime = Field(default_factory=datetime.utcnow)
