"""Einkommensteuertarif — § 32a EStG.

Five legal zones over the zu versteuerndes Einkommen (zvE):
  1. zvE ≤ Grundfreibetrag                 → 0
  2. up to zone2_bis   (progressive)       → (a·y + b)·y,     y = (zvE − GFB) / 10000
  3. up to zone3_bis   (progressive)       → (a·z + b)·z + c, z = (zvE − zone2_bis) / 10000
  4. up to zone4_bis   (42% flat)          → 0.42·zvE − abzug
  5. above             (45% "Reichensteuer") → 0.45·zvE − abzug

The zvE is floored to a whole euro before evaluation and the tax is floored
to a whole euro afterwards (§ 32a Abs. 1 Satz 1/6 EStG).
"""

from decimal import Decimal

from ..models import to_decimal
from ..rounding import ZERO, floor_euro, round_cent
from .steuerdaten import STEUERDATEN_2026, Steuerdaten

_ZEHNTAUSEND = Decimal("10000")


def tarifzone(zve: Decimal, daten: Steuerdaten = STEUERDATEN_2026) -> int:
    """Return the § 32a zone (1–5) the given zvE falls into."""
    zve = floor_euro(to_decimal(zve, "zve"))
    if zve <= daten.grundfreibetrag:
        return 1
    if zve <= daten.zone2_bis:
        return 2
    if zve <= daten.zone3_bis:
        return 3
    if zve <= daten.zone4_bis:
        return 4
    return 5


def einkommensteuer(zve: Decimal, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    """Calculate the tariff income tax for a zvE.

    Total over all inputs: negative or zero income yields 0.

    Args:
        zve: zu versteuerndes Einkommen (annual, EUR).
        daten: Constant set for the tax year.

    Returns:
        Einkommensteuer in whole euros (Decimal without fractional part).

    Examples:
        zvE = 12348  → 0       (Grundfreibetrag)
        zvE = 17799  → 1034    (end of zone 2)
        zvE = 69878  → 18213   (end of zone 3)
    """
    zve = floor_euro(to_decimal(zve, "zve"))
    zone = tarifzone(zve, daten)

    if zone == 1:
        return ZERO
    if zone == 2:
        y = (zve - daten.grundfreibetrag) / _ZEHNTAUSEND
        est = (daten.zone2_a * y + daten.zone2_b) * y
    elif zone == 3:
        z = (zve - daten.zone2_bis) / _ZEHNTAUSEND
        est = (daten.zone3_a * z + daten.zone3_b) * z + daten.zone3_c
    elif zone == 4:
        est = daten.zone4_satz * zve - daten.zone4_abzug
    else:
        est = daten.zone5_satz * zve - daten.zone5_abzug

    return floor_euro(est)


def grenzsteuersatz(zve: Decimal, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    """Marginal tax rate at ``zve`` (0–0.45), from the zone formula's derivative."""
    zve = floor_euro(to_decimal(zve, "zve"))
    zone = tarifzone(zve, daten)
    if zone == 1:
        return ZERO
    if zone == 2:
        y = (zve - daten.grundfreibetrag) / _ZEHNTAUSEND
        satz = (2 * daten.zone2_a * y + daten.zone2_b) / _ZEHNTAUSEND
    elif zone == 3:
        z = (zve - daten.zone2_bis) / _ZEHNTAUSEND
        satz = (2 * daten.zone3_a * z + daten.zone3_b) / _ZEHNTAUSEND
    elif zone == 4:
        satz = daten.zone4_satz
    else:
        satz = daten.zone5_satz
    return satz.quantize(Decimal("0.0001"))


def durchschnittssteuersatz(zve: Decimal, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    """Average tax rate in percent (2 decimals); 0 for zvE ≤ 0."""
    zve = floor_euro(to_decimal(zve, "zve"))
    if zve <= 0:
        return Decimal("0.00")
    return round_cent(einkommensteuer(zve, daten) / zve * 100)
