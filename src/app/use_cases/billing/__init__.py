"""Billing domain use cases"""
from .bill_computation import compute_bill, unit_cost_per_tub, to_bill_lines
from .bill_ledger import save_computed_bill, to_bill_response
from .upsert_bill import UpsertBill
from .list_bills import ListBills
from .dtos import (
    DamagedDeclarationDTO,
    BillLineDTO,
    BillComputationDTO,
    UpsertBillCommandDTO,
    BillResponseDTO,
    UpsertBillResponseDTO,
)

__all__ = [
    "compute_bill",
    "unit_cost_per_tub",
    "to_bill_lines",
    "save_computed_bill",
    "to_bill_response",
    "UpsertBill",
    "ListBills",
    "DamagedDeclarationDTO",
    "BillLineDTO",
    "BillComputationDTO",
    "UpsertBillCommandDTO",
    "BillResponseDTO",
    "UpsertBillResponseDTO",
]
