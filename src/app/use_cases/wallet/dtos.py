"""Data Transfer Objects for Wallet Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import ConfigDict, Field
from src.app.use_cases.base_dto import CamelModel
from src.domain.actor import Actor
from src.domain.payment import PaymentMethod


class WalletAdjustmentCommandDTO(CamelModel):
    """
    Command DTO for a manual wallet credit or debit

    Used as input to CreditWallet and DebitWallet use cases.
    """

    distributor_id: int = Field(..., description="Distributor whose wallet changes")

    amount: Decimal = Field(
        ...,
        max_digits=12,
        decimal_places=2,
        description="Amount to credit/debit (must be > 0)"
    )


class WalletResponseDTO(CamelModel):
    """Response DTO for wallet reads and adjustments"""

    distributor_id: int
    distributor_name: str
    wallet_balance: Decimal
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "distributorId": 1,
                "distributorName": "Ravi Kumar",
                "walletBalance": "1250.00",
                "updatedAt": "2024-01-02T07:30:00",
            }
        }
    )


class RecordPaymentCommandDTO(CamelModel):
    """
    Command DTO for recording a distributor payment

    The payment debits the wallet by ``amount``.
    """

    distributor_id: int
    payment_method: PaymentMethod
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    receipt_image_url: str = Field(..., min_length=1)
    payment_date: Optional[datetime] = None
    actor: Actor


class PaymentResponseDTO(CamelModel):
    payment_id: int
    distributor_id: int
    payment_date: datetime
    payment_method: PaymentMethod
    amount: Decimal
    receipt_image_url: str
    created_by: Actor
    wallet_balance: Optional[Decimal] = None
    created_at: datetime
