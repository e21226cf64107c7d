"""Lohnsteuer — annual wage tax withheld by the employer.

Simplified form of the BMF Programmablaufplan (the official procedure has
~200 steps). Pipeline:

  1. Brutto        = ⌊Jahresbrutto + 12 × geldwerter Vorteil⌋
  2. Pauschalen    = Werbungskosten (1230) + Sonderausgaben (36), not in class VI
  3. Vorsorgepauschale (see ``vorsorgepauschale``)
  4. zvE           = ⌊Brutto − Pauschalen − Vorsorgepauschale − Freibetrag⌋ ≥ 0
  5. Tariff by Steuerklasse:
       II   — zvE reduced by the Entlastungsbetrag für Alleinerziehende
       III  — Splitting: 2 × ESt(zvE / 2)
       V    — full tariff on zvE (approximation; the PAP uses a factor method)
       VI   — zvE = Brutto − Vorsorgepauschale, no other deductions
       I/IV — full tariff on zvE
  6. Soli and Kirchensteuer on the tax of zvE − Kinderfreibeträge
  7. Gesamt        = Lohnsteuer + Soli + Kirchensteuer

Steuerklasse V/VI handling is an approximation of the official method and
will deviate from bmf-steuerrechner.de for those classes.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..models import LohnsteuerProfil
from ..rounding import ZERO, floor_euro, non_negative, round_cent
from .einkommensteuer import einkommensteuer
from .steuerdaten import STEUERDATEN_2026, Steuerdaten
from .vorsorgepauschale import berechne_vorsorgepauschale
from .zuschlaege import calculate_kirchensteuer, calculate_soli

logger = logging.getLogger(__name__)

STEUERKLASSEN = (1, 2, 3, 4, 5, 6)


@dataclass
class LohnsteuerResult:
    """Annual wage-tax bundle with all intermediate values."""

    brutto: Decimal = ZERO
    werbungskosten: Decimal = ZERO
    sonderausgaben: Decimal = ZERO
    vorsorgepauschale: Decimal = ZERO
    zve: Decimal = ZERO            #: zvE after the Steuerklasse adjustment
    zve_zuschlag: Decimal = ZERO   #: zvE − Kinderfreibeträge (Soli/KiSt base)
    lohnsteuer: Decimal = ZERO
    soli: Decimal = ZERO
    kirchensteuer: Decimal = ZERO
    gesamt: Decimal = ZERO


def tarif_nach_klasse(
    zve: Decimal,
    steuerklasse: int,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> Decimal:
    """Apply the § 32a tariff, with splitting for Steuerklasse III."""
    if steuerklasse == 3:
        return einkommensteuer(zve / 2, daten) * 2
    return einkommensteuer(zve, daten)


def steuer_fuer_zuschlaege(
    zve: Decimal,
    kinderfreibetrag: Decimal,
    steuerklasse: int,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> tuple[Decimal, Decimal]:
    """Assessment base for Soli and Kirchensteuer (§ 51a Abs. 2a EStG).

    Returns:
        Tuple of (zve_after_kinderfreibetrag, tax_on_that_zve).
    """
    zve_zuschlag = non_negative(zve - non_negative(kinderfreibetrag) * daten.kinderfreibetrag)
    return zve_zuschlag, tarif_nach_klasse(zve_zuschlag, steuerklasse, daten)


def berechne_lohnsteuer(
    profil: LohnsteuerProfil,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> LohnsteuerResult:
    """Calculate annual Lohnsteuer, Soli and Kirchensteuer.

    Never fails for numeric input: negative amounts and allowances clamp
    to zero, and an unknown Steuerklasse is treated like class I/IV.

    Args:
        profil: Personal tax parameters (annual gross, class, church, ...).
        daten: Constant set for the tax year.

    Returns:
        LohnsteuerResult — all amounts annual, 2 decimal places.
    """
    klasse = profil.steuerklasse
    if klasse not in STEUERKLASSEN:
        logger.warning("Unknown Steuerklasse %r — calculating as class I/IV", klasse)

    res = LohnsteuerResult()
    res.brutto = non_negative(
        floor_euro(profil.brutto_jahr + non_negative(profil.geldwerter_vorteil) * 12)
    )

    if klasse != 6:
        res.werbungskosten = daten.werbungskosten_pauschale
        res.sonderausgaben = daten.sonderausgaben_pauschale

    res.vorsorgepauschale = berechne_vorsorgepauschale(res.brutto, klasse, daten).betrag

    zve = non_negative(floor_euro(
        res.brutto
        - res.werbungskosten
        - res.sonderausgaben
        - res.vorsorgepauschale
        - non_negative(profil.steuerfreibetrag)
    ))

    if klasse == 2:
        zve = non_negative(zve - daten.entlastungsbetrag_alleinerziehende)
    elif klasse == 6:
        zve = non_negative(res.brutto - res.vorsorgepauschale)
    # class 5 is taxed on the full tariff; the PAP factor method is not modelled
    res.zve = zve

    lohnsteuer = tarif_nach_klasse(zve, klasse, daten)

    res.zve_zuschlag, steuer_zuschlag = steuer_fuer_zuschlaege(
        zve, profil.kinderfreibetrag, klasse, daten
    )
    res.soli = calculate_soli(steuer_zuschlag, klasse, daten)
    if profil.kirchensteuer:
        res.kirchensteuer = calculate_kirchensteuer(steuer_zuschlag, profil.bundesland, daten)
    else:
        res.kirchensteuer = round_cent(ZERO)

    res.lohnsteuer = round_cent(lohnsteuer)
    res.gesamt = round_cent(lohnsteuer + res.soli + res.kirchensteuer)

    logger.debug(
        "Lohnsteuer class %s: brutto=%s vsp=%s zvE=%s lst=%s soli=%s kist=%s",
        klasse, res.brutto, res.vorsorgepauschale, res.zve,
        res.lohnsteuer, res.soli, res.kirchensteuer,
    )
    return res
