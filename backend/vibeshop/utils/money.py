from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[int, float, str, Decimal]


def to_cents(amount: Number) -> int:
    """Convert a decimal currency amount (79.99) to integer cents (7999)."""
    try:
        value = Decimal(str(amount))
        return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, OverflowError):
        raise ValueError(f"Invalid amount: {amount!r}")


def from_cents(cents: int) -> float:
    return float(Decimal(cents or 0) / 100)


# largest value an INTEGER column holds on every supported backend
MAX_INT = 2**31 - 1
