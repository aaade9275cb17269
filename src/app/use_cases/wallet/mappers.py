from decimal import Decimal
from typing import Optional
from src.domain.actor import Actor
from src.domain.payment import Payment
from .dtos import PaymentResponseDTO


def to_payment_response(
    payment: Payment,
    created_by_name: Optional[str] = None,
    wallet_balance: Optional[Decimal] = None,
) -> PaymentResponseDTO:
    return PaymentResponseDTO(
        payment_id=payment.id,
        distributor_id=payment.distributor_id,
        payment_date=payment.payment_date,
        payment_method=payment.payment_method,
        amount=payment.amount,
        receipt_image_url=payment.receipt_image_url,
        created_by=Actor(kind=payment.created_by_kind, id=payment.created_by_id, name=created_by_name),
        wallet_balance=wallet_balance,
        created_at=payment.created_at,
    )
