"""Zuschlagsteuern — Solidaritätszuschlag and Kirchensteuer on the wage tax.

§ 3 Abs. 3, § 4 SolZG: Soli is 5.5% of the assessment base, but only above
a Freigrenze (doubled for Steuerklasse III). Just above the threshold the
Milderungszone caps it at 11.9% of the excess, so the surcharge phases in
without a cliff.

Kirchensteuer is a flat 8% (Bayern, Baden-Württemberg) or 9% (all other
Länder) of the assessment base for church members.

For both, the assessment base is the tax on the zvE reduced by the
Kinderfreibeträge (§ 51a Abs. 2a EStG) — see ``lohnsteuer.steuer_fuer_zuschlaege``.
Both results are truncated to the cent, never rounded up.
"""

import logging
from decimal import Decimal

from ..models import land_name
from ..rounding import ZERO, floor_cent
from .steuerdaten import STEUERDATEN_2026, Steuerdaten

logger = logging.getLogger(__name__)


def soli_freigrenze(steuerklasse: int, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    if steuerklasse == 3:
        return daten.soli_freigrenze_verheiratet
    return daten.soli_freigrenze


def calculate_soli(
    steuer: Decimal,
    steuerklasse: int = 1,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> Decimal:
    """Calculate the Solidaritätszuschlag on an annual tax amount.

    Args:
        steuer: Tax-for-surcharge (annual, after Kinderfreibetrag).
        steuerklasse: Selects the married Freigrenze for class 3.

    Returns:
        Soli truncated to the cent; 0 at or below the Freigrenze.

    Examples:
        steuer=18130, class 1 → 0.00    (at the Freigrenze)
        steuer=18131, class 1 → 0.11    (Milderungszone: 1 × 11.9%)
        steuer=36261, class 3 → 0.11
    """
    freigrenze = soli_freigrenze(steuerklasse, daten)
    if steuer <= freigrenze:
        return floor_cent(ZERO)
    voll = steuer * daten.soli_satz
    milderung = (steuer - freigrenze) * daten.soli_milderung
    return floor_cent(min(voll, milderung))


def kirchensteuer_satz(bundesland: str, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    """Church-tax rate for a Bundesland; unknown names fall back to 9%."""
    satz = daten.kirchensteuer_saetze.get(land_name(bundesland))
    if satz is None:
        logger.warning(
            "Unknown Bundesland %r — using default Kirchensteuer rate %s",
            bundesland, daten.kirchensteuer_default,
        )
        return daten.kirchensteuer_default
    return satz


def calculate_kirchensteuer(
    steuer: Decimal,
    bundesland: str,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> Decimal:
    """Calculate Kirchensteuer (annual), truncated to the cent."""
    return floor_cent(steuer * kirchensteuer_satz(bundesland, daten))
