"""
Display formatting for aggregated amounts.
Kept apart from the converter, which never rounds.
"""

from decimal import ROUND_HALF_UP, Decimal


def _grouped(value: Decimal, places: int) -> str:
    rounded = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number_value(value: Decimal | int) -> str:
    """
    Thousands-grouped number with at most three decimals.

    Example:
        >>> format_number_value(1234)
        '1,234'
        >>> format_number_value(Decimal("148.5"))
        '148.5'
    """
    return _grouped(value, 3)


def format_currency_value(currency: str, value: Decimal) -> str:
    """
    Currency code followed by the amount with at most two decimals.

    Example:
        >>> format_currency_value("USD", Decimal("1234.5"))
        'USD 1,234.5'
        >>> format_currency_value("JPY", Decimal("15000"))
        'JPY 15,000'
    """
    return f"{currency} {_grouped(value, 2)}"
