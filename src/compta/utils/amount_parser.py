"""Amount parsing and rounding utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")
BALANCE_TOLERANCE = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "123,45" (decimal comma)
    - "1 234,56" or "1.234,56" (thousands separators)
    - "1,234.56"
    - "1000 FCFA", "€12.50"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to 2 decimals

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = re.sub(r"(?i)[$€£¥]|\bfcfa\b|\bxof\b|\beur\b", "", amount_str)
    amount_str = re.sub(r"\s", "", amount_str)

    # Whichever of ',' and '.' comes last is the decimal separator
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            amount_str = amount_str.replace(".", "").replace(",", ".")
        else:
            amount_str = amount_str.replace(",", "")
    elif "," in amount_str:
        amount_str = amount_str.replace(",", ".")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if is_negative:
        amount = -amount
    return round_amount(amount)


def round_amount(amount) -> Decimal:
    """Round an amount half-up to 2 decimals."""
    if amount is None:
        return Decimal("0.00")
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def is_within_tolerance(first: Decimal, second: Decimal) -> bool:
    """Return True when two amounts differ by at most one cent."""
    return abs(round_amount(first) - round_amount(second)) <= BALANCE_TOLERANCE


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and 2 decimals."""
    return f"{amount:,.2f}"
