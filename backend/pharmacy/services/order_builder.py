"""
Order Builder - derived values for sales and structural checks for
prescriptions. No database access.
"""
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable

from pharmacy.exceptions import invalid_input

MONEY = Decimal("0.01")
# Largest value a Numeric(10, 2) column holds
MAX_AMOUNT = Decimal("99999999.99")


def to_money(value: Any) -> Decimal:
    """Convert to a 2-decimal Decimal without going through float arithmetic."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise invalid_input(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise invalid_input(f"Invalid amount: {value!r}")
    return amount.quantize(MONEY, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class SaleLine:
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class SaleOrder:
    lines: list[SaleLine]
    total: Decimal

    def quantities_by_product(self) -> dict[int, int]:
        """Requested quantity per distinct product, first-seen order kept."""
        totals: dict[int, int] = defaultdict(int)
        for line in self.lines:
            totals[line.product_id] += line.quantity
        return dict(totals)


def build_sale(items: Iterable[Any]) -> SaleOrder:
    """Compute line subtotals and the order total.

    Each item needs product_id, quantity and unit_price attributes. The unit
    price is taken as given, so a sale can be priced differently from the
    product's current selling price.

    Raises:
        AppException(INVALID_INPUT): empty item list, non-positive quantity
        non-positive unit price, or a subtotal or total above MAX_AMOUNT.
    """
    items = list(items or [])
    if not items:
        raise invalid_input("A sales transaction needs at least one item")

    lines = []
    for index, item in enumerate(items):
        quantity = item.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise invalid_input(
                f"Item {index}: quantity must be a positive integer",
                product_id=item.product_id
            )

        unit_price = to_money(item.unit_price)
        if unit_price <= 0:
            raise invalid_input(
                f"Item {index}: unit price must be positive",
                product_id=item.product_id
            )

        subtotal = (unit_price * quantity).quantize(MONEY)
        if subtotal > MAX_AMOUNT:
            raise invalid_input(
                f"Item {index}: subtotal exceeds {MAX_AMOUNT}",
                product_id=item.product_id
            )

        lines.append(SaleLine(
            product_id=item.product_id,
            quantity=quantity,
            unit_price=unit_price,
            subtotal=subtotal
        ))

    total = sum((line.subtotal for line in lines), Decimal("0.00")).quantize(MONEY)
    if total > MAX_AMOUNT:
        raise invalid_input(f"Sale total exceeds {MAX_AMOUNT}")
    return SaleOrder(lines=lines, total=total)


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def check_prescription(patient_name: str, doctor_name: str, medicines: Iterable[Any]) -> list[Any]:
    """Validate a prescription before touching the database.

    Returns the medicines as a list.
    """
    if _blank(patient_name):
        raise invalid_input("Patient name is required")
    if _blank(doctor_name):
        raise invalid_input("Doctor name is required")

    medicines = list(medicines or [])
    if not medicines:
        raise invalid_input("A prescription needs at least one medicine")

    for index, medicine in enumerate(medicines):
        if _blank(medicine.dosage):
            raise invalid_input(
                f"Medicine {index}: dosage is required",
                product_id=medicine.product_id
            )
    return medicines
