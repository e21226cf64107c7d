"""Vorsorgepauschale — § 39b Abs. 2 Satz 5 Nr. 3 EStG.

The wage-tax procedure deducts a flat approximation of the employee's
mandatory insurance contributions:

  RV-Anteil    = ⌈ min(Brutto, BBG_RV × 12) × RV / 2 ⌉
  KV/PV-Anteil = ⌈ min(Brutto, BBG_KV × 12) × ((KV + Zusatzbeitrag) / 2 + PV / 2) ⌉

Both components are rounded *up* to whole euros. The
Mindestvorsorgepauschale (12% of gross, capped at €1,900 or €3,000 in
Steuerklasse III) applies when it is more favourable (Günstigerprüfung).

Steuerklasse VI (second job) receives no Vorsorgepauschale at all.
"""

from dataclasses import dataclass
from decimal import Decimal

from ..rounding import ZERO, ceil_euro, non_negative
from .steuerdaten import STEUERDATEN_2026, Steuerdaten


@dataclass
class VorsorgepauschaleResult:
    rv_anteil: Decimal = ZERO
    kv_pv_anteil: Decimal = ZERO
    mindest: Decimal = ZERO
    betrag: Decimal = ZERO  #: max(rv_anteil + kv_pv_anteil, mindest)


def mindestvorsorge_max(steuerklasse: int, daten: Steuerdaten = STEUERDATEN_2026) -> Decimal:
    if steuerklasse == 3:
        return daten.mindestvorsorge_max_stkl3
    return daten.mindestvorsorge_max


def berechne_vorsorgepauschale(
    brutto: Decimal,
    steuerklasse: int,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> VorsorgepauschaleResult:
    """Calculate the Vorsorgepauschale for an annual gross.

    Args:
        brutto: Annual gross including non-cash benefits, whole euros.
        steuerklasse: 1–6; class 6 yields an all-zero result.
        daten: Constant set for the tax year.

    Returns:
        VorsorgepauschaleResult with both components, the minimum amount
        and the deductible ``betrag``.
    """
    if steuerklasse == 6:
        return VorsorgepauschaleResult()

    brutto = non_negative(brutto)

    rv_basis = min(brutto, daten.bbg_rv_jahr)
    rv_anteil = ceil_euro(rv_basis * daten.rv_satz / 2)

    kv_basis = min(brutto, daten.bbg_kv_jahr)
    kv_pv_satz = (daten.kv_satz + daten.kv_zusatz_default) / 2 + daten.pv_satz / 2
    kv_pv_anteil = ceil_euro(kv_basis * kv_pv_satz)

    mindest = min(
        ceil_euro(brutto * daten.mindestvorsorge_satz),
        mindestvorsorge_max(steuerklasse, daten),
    )

    return VorsorgepauschaleResult(
        rv_anteil=rv_anteil,
        kv_pv_anteil=kv_pv_anteil,
        mindest=mindest,
        betrag=max(rv_anteil + kv_pv_anteil, mindest),
    )
