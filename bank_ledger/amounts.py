"""
Amount Handling

All balances and transaction amounts are Decimal. Inputs arriving as int,
float or text are normalised here; floats go through str() so that 0.1
becomes Decimal('0.1') rather than its binary approximation.
"""

from decimal import Context, Decimal, Inexact, InvalidOperation, Overflow
from typing import Optional, Union
import re

Numeric = Union[Decimal, int, float, str]

ZERO = Decimal("0")

# Amounts must stay below 10**15 and carry at most 8 decimal places
MAX_INTEGER_DIGITS = 15
MAX_DECIMAL_PLACES = 8
SMALLEST_UNIT = Decimal(1).scaleb(-MAX_DECIMAL_PLACES)

BALANCE_CONTEXT = Context(prec=28, traps=[Inexact, Overflow, InvalidOperation])


def decimal_from_string(value: str) -> Decimal:
    """
    Convert user-entered text to Decimal

    Surrounding whitespace, one leading currency symbol ($ € £ ¥) and thousands
    separators are tolerated: " $1,250.50 " parses as Decimal('1250.50').

    Args:
        value: String representation of a number

    Returns:
        Decimal value

    Raises:
        ValueError: If the string is empty or not a number
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    clean_value = re.sub(r"^[$€£¥]", "", clean_value)
    if re.fullmatch(r"[-+]?\d{1,3}(,\d{3})+(\.\d+)?", clean_value):
        clean_value = clean_value.replace(",", "")

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Invalid decimal value: {value}")


def to_decimal(value: Numeric) -> Optional[Decimal]:
    """
    Normalise a numeric input to a finite Decimal

    Returns None when the value is not a usable number (bool, NaN,
    infinity, unparseable text or an unsupported type).
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = decimal_from_string(value)
        except ValueError:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result


def within_bounds(value: Decimal) -> bool:
    """True when the value fits the supported magnitude and scale"""
    if value.is_zero():
        return True
    if value.adjusted() >= MAX_INTEGER_DIGITS:
        return False
    return value == value.quantize(SMALLEST_UNIT)


def exact_sum(left: Decimal, right: Decimal) -> Optional[Decimal]:
    """Add without rounding; None when the result cannot be held exactly"""
    try:
        return BALANCE_CONTEXT.add(left, right)
    except (Inexact, Overflow):
        return None


def format_amount(value: Decimal) -> str:
    """Format for display with two decimal places and thousands separators"""
    return f"{value:,.2f}"
