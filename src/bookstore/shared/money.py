"""Exact money arithmetic.

Amounts are :class:`~decimal.Decimal` in memory and canonical two-decimal
strings (``"25.50"``) at rest, so no value ever passes through a float.
"""

from decimal import Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def parse_amount(value) -> Decimal:
    """Parse a non-negative amount with at most two fractional digits.

    Raises ``ValueError`` for anything else. Floats are rejected outright.
    """
    if isinstance(value, (float, bool)):
        raise ValueError("Amounts must be given as text or Decimal")

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"'{value}' is not a valid amount") from exc

    if not amount.is_finite():
        raise ValueError(f"'{value}' is not a valid amount")
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    if amount.as_tuple().exponent < -2:
        raise ValueError("Amount cannot have more than two decimal places")

    return amount.quantize(CENT)


def format_amount(amount) -> str:
    """Canonical text form of an amount: ``Decimal("5.5")`` -> ``"5.50"``."""
    return str(parse_amount(amount))


def line_total(price, quantity: int) -> Decimal:
    return parse_amount(price) * quantity


def sum_amounts(amounts) -> Decimal:
    total = ZERO
    for amount in amounts:
        total += amount
    return total.quantize(CENT)
