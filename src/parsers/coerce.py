"""Lenient converters for provider fields that arrive as strings, numbers or nothing."""

from decimal import Decimal, InvalidOperation

# Larger exponents overflow the default decimal context once multiplied or summed
MAX_EXPONENT = 100


def to_decimal(val: object) -> Decimal | None:
    """Parse '0.05', 0.05, 5 into Decimal.

    Empty, None, junk, NaN, inf and magnitudes beyond 1e±100 give None.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if not val:
            return None
    try:
        result = Decimal(str(val))
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    if result and abs(result.adjusted()) > MAX_EXPONENT:
        return None
    return result


def to_flag(val: object) -> bool | None:
    """Parse GoPlus '0'/'1' style flags by integer truthiness.

    '1', '2', 1 -> True; '0', 0 -> False; None, '' or non-numeric -> None.
    """
    if isinstance(val, bool):
        return val
    number = to_decimal(val)
    if number is None:
        return None
    return int(number) != 0
