"""Wallet ledger use cases"""
from .get_wallet import GetWallet
from .adjust_wallet import CreditWallet, DebitWallet
from .record_payment import RecordPayment
from .list_payments import ListPayments
from .dtos import (
    WalletAdjustmentCommandDTO,
    WalletResponseDTO,
    RecordPaymentCommandDTO,
    PaymentResponseDTO,
)

__all__ = [
    "GetWallet",
    "CreditWallet",
    "DebitWallet",
    "RecordPayment",
    "ListPayments",
    "WalletAdjustmentCommandDTO",
    "WalletResponseDTO",
    "RecordPaymentCommandDTO",
    "PaymentResponseDTO",
]
