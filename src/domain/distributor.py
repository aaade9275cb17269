"""Distributor Domain Entity

A distributor receives orders and holds a wallet balance that settlements
credit and payments debit.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, IdType


class DistributorStatus(str, Enum):
    """Distributor account status"""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class Distributor(BaseModel, table=True):
    """
    Distributor - Receives orders, owns a wallet

    Domain Rules:
    - username is unique
    - wallet_balance changes only through atomic storage-level
      increments/decrements (never load-mutate-save)
    - wallet_balance is signed; only debits enforce balance >= amount
    """

    __tablename__ = "distributors"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique distributor identifier (auto-increment)"
    )

    distributor_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Distributor display name"
    )

    company_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Company the distributor trades as"
    )

    contact: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Contact phone number"
    )

    username: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
        description="Login name (unique)"
    )

    status: DistributorStatus = Field(
        default=DistributorStatus.PENDING,
        description="Account status (pending, active, inactive)"
    )

    wallet_balance: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(12, 2), nullable=False, default=0),
        description="Wallet balance (precision: 12,2)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last wallet/profile change timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "distributor_name": "Ravi Kumar",
                "company_name": "Ravi Dairy Agency",
                "contact": "9876543210",
                "username": "ravi",
                "status": "active",
                "wallet_balance": "1250.00",
            }
        }
