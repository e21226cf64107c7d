"""German number formatting for display ("1.234,56 €", "12,3 %")."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .models import to_decimal


def _german(value, decimals: int) -> str:
    q = Decimal(1).scaleb(-decimals)
    rounded = to_decimal(value).quantize(q, rounding=ROUND_HALF_UP)
    text = f"{rounded:,.{decimals}f}"
    # 1,234.56 → 1.234,56
    return text.replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def format_euro(value, decimals: int = 2) -> str:
    """Format an amount as German currency, e.g. ``1.234,56 €``."""
    return f"{_german(value, decimals)} €"


def format_prozent(value, decimals: int = 1) -> str:
    """Format a percentage value, e.g. ``12,3 %`` for 12.345."""
    return f"{_german(value, decimals)} %"


def parse_german_number(text) -> Decimal:
    """Parse a German-formatted number ("1.234,56" → 1234.56).

    Numbers pass through unchanged; empty or unparseable text yields 0,
    matching how the calculator form treats blank fields.
    """
    if isinstance(text, (int, float, Decimal)) and not isinstance(text, bool):
        return to_decimal(text)
    if not text:
        return Decimal("0")
    cleaned = str(text).strip().replace("€", "").replace("%", "").strip()
    cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
