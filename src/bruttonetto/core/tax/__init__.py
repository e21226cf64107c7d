"""German wage-tax engine (Lohnsteuer 2026).

High-level entry point:
    from bruttonetto.core.tax import berechne_lohnsteuer

Wage-tax pipeline for an annual gross:
  1. Vorsorgepauschale     (§ 39b Abs. 2 EStG) — flat insurance deduction
  2. zvE and Steuerklasse  (§ 38b EStG)        — allowances, splitting
  3. Einkommensteuertarif  (§ 32a EStG)        — progressive tariff
  4. Soli + Kirchensteuer  (§ 4 SolZG / § 51a EStG)

Sub-modules (importable individually for testing or reuse):
    steuerdaten        — constant set per tax year
    einkommensteuer    — § 32a tariff
    vorsorgepauschale  — flat insurance deduction
    zuschlaege         — Solidaritätszuschlag and Kirchensteuer
    lohnsteuer         — annual wage-tax bundle
"""

from .einkommensteuer import (
    durchschnittssteuersatz,
    einkommensteuer,
    grenzsteuersatz,
    tarifzone,
)
from .lohnsteuer import (
    STEUERKLASSEN,
    LohnsteuerResult,
    berechne_lohnsteuer,
    steuer_fuer_zuschlaege,
    tarif_nach_klasse,
)
from .steuerdaten import (
    STEUERDATEN,
    STEUERDATEN_2026,
    Steuerdaten,
    get_steuerdaten,
)
from .vorsorgepauschale import (
    VorsorgepauschaleResult,
    berechne_vorsorgepauschale,
)
from .zuschlaege import (
    calculate_kirchensteuer,
    calculate_soli,
    kirchensteuer_satz,
    soli_freigrenze,
)

__all__ = [
    "berechne_lohnsteuer",
    # steuerdaten
    "STEUERDATEN",
    "STEUERDATEN_2026",
    "Steuerdaten",
    "get_steuerdaten",
    # einkommensteuer
    "einkommensteuer",
    "tarifzone",
    "grenzsteuersatz",
    "durchschnittssteuersatz",
    # lohnsteuer
    "STEUERKLASSEN",
    "LohnsteuerResult",
    "steuer_fuer_zuschlaege",
    "tarif_nach_klasse",
    # vorsorgepauschale
    "VorsorgepauschaleResult",
    "berechne_vorsorgepauschale",
    # zuschlaege
    "calculate_soli",
    "calculate_kirchensteuer",
    "kirchensteuer_satz",
    "soli_freigrenze",
]
