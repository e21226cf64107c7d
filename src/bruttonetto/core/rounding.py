"""Rounding rules used throughout the tax and contribution calculations.

Each step of the calculation has its own rule:
  - taxable income and tariff results are floored to whole euros
  - Vorsorgepauschale components are rounded *up* to whole euros
  - Soli and Kirchensteuer are truncated to the cent
  - totals and contribution line items are rounded half away from zero

Quantizing runs with enough context precision for the value's magnitude,
so arbitrarily large finite amounts never raise ``InvalidOperation``.
"""

from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")
EURO = Decimal("1")
ZERO = Decimal("0")


def _quantize(value: Decimal, exp: Decimal, rounding: str) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() - exp.adjusted() + 2)
        return value.quantize(exp, rounding=rounding)


def round_cent(value: Decimal) -> Decimal:
    return _quantize(value, CENT, ROUND_HALF_UP)


def floor_cent(value: Decimal) -> Decimal:
    return _quantize(value, CENT, ROUND_FLOOR)


def floor_euro(value: Decimal) -> Decimal:
    return _quantize(value, EURO, ROUND_FLOOR)


def ceil_euro(value: Decimal) -> Decimal:
    return _quantize(value, EURO, ROUND_CEILING)


def non_negative(value: Decimal) -> Decimal:
    """Clamp to zero — no deduction, tax or contribution is ever negative."""
    return max(value, ZERO)
