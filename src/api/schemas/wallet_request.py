"""Request schemas for Wallet and Payment API"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import ConfigDict, Field
from src.app.use_cases.base_dto import CamelModel
from src.domain.payment import PaymentMethod


class WalletAdjustmentRequestSchema(CamelModel):
    """
    Request schema for manual wallet credit/debit

    Used for POST /wallets/{id}/credit and /wallets/{id}/debit.
    """

    amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=12,
        decimal_places=2,
        description="Amount (must be > 0)"
    )


class RecordPaymentRequestSchema(CamelModel):
    """Request schema for POST /payments"""

    distributor_id: int

    payment_method: PaymentMethod

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)

    receipt_image_url: str = Field(..., min_length=1, description="Uploaded receipt URL")

    payment_date: Optional[datetime] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "distributorId": 1,
                "paymentMethod": "PhonePe",
                "amount": "500.00",
                "receiptImageUrl": "https://cdn.example.com/receipts/r-102.jpg",
            }
        }
    )
