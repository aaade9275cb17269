"""Bill computation

Pure mapping from (order lines, damaged declarations, catalog) to bill
lines and totals. No I/O; shared by bill preview and settlement.

Pricing:
- An order line costs ``quantity * tub cost``. Tub cost is ``cost_per_tub``
  when set, else ``cost_per_packet * packets_per_tub``, else 0. Missing
  pricing never blocks billing.
- A damaged declaration costs ``packets * cost_per_packet``.
- Lines whose product is not in the catalog are skipped.
"""

from decimal import Decimal
from typing import Iterable, List, Mapping, Protocol
from src.domain.base import to_money
from src.domain.bill import BillLine, BillLineType
from src.domain.product import Product
from .dtos import BillComputationDTO, BillLineDTO, DamagedDeclarationDTO

DEFAULT_ITEM_UNIT = "tubs"
DAMAGED_UNIT = "packets"


class OrderLine(Protocol):
    product_id: int
    quantity: Decimal
    unit: str


def unit_cost_per_tub(product: Product) -> Decimal:
    """Tub cost of a product, falling back to the packet-derived cost"""
    if product.cost_per_tub:
        return to_money(product.cost_per_tub)
    if product.cost_per_packet and product.packets_per_tub:
        return to_money(Decimal(product.cost_per_packet) * product.packets_per_tub)
    return to_money(0)


def compute_bill(
    lines: Iterable[OrderLine],
    damaged: Iterable[DamagedDeclarationDTO],
    catalog: Mapping[int, Product],
) -> BillComputationDTO:
    """
    Compute bill lines and totals

    Args:
        lines: Order line items (product_id, quantity, unit)
        damaged: Damaged packet declarations
        catalog: Products by ID; must contain every product to be priced

    Returns:
        BillComputationDTO with item lines, damaged lines and totals
    """
    items: List[BillLineDTO] = []
    for line in lines:
        product = catalog.get(line.product_id)
        if product is None:
            continue

        price = unit_cost_per_tub(product)
        quantity = Decimal(line.quantity)
        items.append(
            BillLineDTO(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                unit=line.unit or DEFAULT_ITEM_UNIT,
                price=price,
                total=to_money(price * quantity),
            )
        )

    damaged_items: List[BillLineDTO] = []
    for declaration in damaged:
        if declaration.damaged_quantity <= 0:
            continue
        product = catalog.get(declaration.product_id)
        if product is None:
            continue

        price = to_money(product.cost_per_packet)
        damaged_items.append(
            BillLineDTO(
                product_id=product.id,
                product_name=product.name,
                quantity=Decimal(declaration.damaged_quantity),
                unit=DAMAGED_UNIT,
                price=price,
                total=to_money(price * declaration.damaged_quantity),
            )
        )

    subtotal = to_money(sum((item.total for item in items), Decimal("0")))
    total_damaged_cost = to_money(sum((item.total for item in damaged_items), Decimal("0")))
    total_amount = max(subtotal - total_damaged_cost, Decimal("0.00"))

    return BillComputationDTO(
        items=items,
        damaged_items=damaged_items,
        subtotal=subtotal,
        total_damaged_cost=total_damaged_cost,
        total_amount=to_money(total_amount),
    )


def to_bill_lines(computation: BillComputationDTO) -> List[BillLine]:
    """Turn a computation into BillLine entities (bill_id unset)"""
    bill_lines = [
        _to_bill_line(item, BillLineType.ITEM) for item in computation.items
    ]
    bill_lines.extend(
        _to_bill_line(item, BillLineType.DAMAGED) for item in computation.damaged_items
    )
    return bill_lines


def _to_bill_line(line: BillLineDTO, line_type: BillLineType) -> BillLine:
    return BillLine(
        line_type=line_type,
        product_id=line.product_id,
        product_name=line.product_name,
        quantity=line.quantity,
        unit=line.unit,
        price=line.price,
        total=line.total,
    )
