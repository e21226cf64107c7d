"""Steuerdaten — tariff, allowance and contribution constants per tax year.

Sources for 2026:
  - § 32a EStG               — Einkommensteuertarif (Steuerfortentwicklungsgesetz)
  - § 9a / § 10c EStG         — Werbungskosten- und Sonderausgabenpauschale
  - § 39b Abs. 2 EStG         — Vorsorgepauschale (Lohnsteuerabzug)
  - § 3, § 4 SolZG            — Solidaritätszuschlag, Freigrenze, Milderungszone
  - SV-Rechengrößenverordnung 2026 — Beitragsbemessungsgrenzen
  - § 55 SGB XI               — Pflegeversicherung, Kinderabschläge

A ``Steuerdaten`` value is built once at import time and never mutated;
it is safe to share between threads.

Verify results against bmf-steuerrechner.de — the wage-tax procedure built
on these values is a simplification of the official Programmablaufplan.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from ..exceptions import UnknownTaxYearError
from ..models import Bundesland


def _kirchensteuer_2026() -> Mapping[str, Decimal]:
    rates = {land.value: Decimal("0.09") for land in Bundesland}
    rates[Bundesland.BADEN_WUERTTEMBERG.value] = Decimal("0.08")
    rates[Bundesland.BAYERN.value] = Decimal("0.08")
    return MappingProxyType(rates)


def _pv_an_satz_2026() -> Mapping[int, Decimal]:
    # key 0 = kinderlos (ab 23 Jahren), 5 = fünf und mehr Kinder unter 25
    return MappingProxyType({
        0: Decimal("0.023"),   # inkl. Kinderlosenzuschlag
        1: Decimal("0.017"),
        2: Decimal("0.0145"),  # −0.25% je weiterem Kind unter 25
        3: Decimal("0.012"),
        4: Decimal("0.0095"),
        5: Decimal("0.007"),
    })


@dataclass(frozen=True)
class Steuerdaten:
    """Immutable constant set for one tax year."""

    jahr: int

    # ── Freibeträge / Pauschalen ──
    grundfreibetrag: Decimal
    kinderfreibetrag: Decimal
    werbungskosten_pauschale: Decimal
    sonderausgaben_pauschale: Decimal
    entlastungsbetrag_alleinerziehende: Decimal

    # ── § 32a EStG — zone boundaries (upper bound, inclusive) ──
    zone2_bis: Decimal
    zone3_bis: Decimal
    zone4_bis: Decimal

    # ── § 32a EStG — coefficients ──
    zone2_a: Decimal
    zone2_b: Decimal
    zone3_a: Decimal
    zone3_b: Decimal
    zone3_c: Decimal
    zone4_satz: Decimal
    zone4_abzug: Decimal
    zone5_satz: Decimal
    zone5_abzug: Decimal

    # ── Solidaritätszuschlag ──
    soli_satz: Decimal
    soli_freigrenze: Decimal
    soli_freigrenze_verheiratet: Decimal
    soli_milderung: Decimal

    # ── Vorsorgepauschale ──
    mindestvorsorge_satz: Decimal
    mindestvorsorge_max: Decimal
    mindestvorsorge_max_stkl3: Decimal

    # ── Sozialversicherung (monthly ceilings, total rates) ──
    bbg_kv_monat: Decimal
    bbg_rv_monat: Decimal
    kv_satz: Decimal
    kv_zusatz_default: Decimal
    pv_satz: Decimal
    rv_satz: Decimal
    av_satz: Decimal
    pv_sachsen_an_extra: Decimal

    minijob_grenze: Decimal
    versicherungspflichtgrenze: Decimal

    kirchensteuer_saetze: Mapping[str, Decimal] = field(default_factory=_kirchensteuer_2026)
    kirchensteuer_default: Decimal = Decimal("0.09")
    pv_an_satz: Mapping[int, Decimal] = field(default_factory=_pv_an_satz_2026)
    pv_sonderland: str = Bundesland.SACHSEN.value

    @property
    def bbg_kv_jahr(self) -> Decimal:
        return self.bbg_kv_monat * 12

    @property
    def bbg_rv_jahr(self) -> Decimal:
        return self.bbg_rv_monat * 12


STEUERDATEN_2026 = Steuerdaten(
    jahr=2026,
    grundfreibetrag=Decimal("12348"),
    kinderfreibetrag=Decimal("9756"),
    werbungskosten_pauschale=Decimal("1230"),
    sonderausgaben_pauschale=Decimal("36"),
    entlastungsbetrag_alleinerziehende=Decimal("4260"),
    zone2_bis=Decimal("17799"),
    zone3_bis=Decimal("69878"),
    zone4_bis=Decimal("277825"),
    zone2_a=Decimal("914.51"),
    zone2_b=Decimal("1400"),
    zone3_a=Decimal("173.10"),
    zone3_b=Decimal("2397"),
    zone3_c=Decimal("1034.87"),
    zone4_satz=Decimal("0.42"),
    zone4_abzug=Decimal("11135.63"),
    zone5_satz=Decimal("0.45"),
    zone5_abzug=Decimal("19470.38"),
    soli_satz=Decimal("0.055"),
    soli_freigrenze=Decimal("18130"),
    soli_freigrenze_verheiratet=Decimal("36260"),
    soli_milderung=Decimal("0.119"),
    mindestvorsorge_satz=Decimal("0.12"),
    mindestvorsorge_max=Decimal("1900"),
    mindestvorsorge_max_stkl3=Decimal("3000"),
    bbg_kv_monat=Decimal("5812.50"),
    bbg_rv_monat=Decimal("8450.00"),
    kv_satz=Decimal("0.146"),
    kv_zusatz_default=Decimal("0.029"),
    pv_satz=Decimal("0.036"),
    rv_satz=Decimal("0.186"),
    av_satz=Decimal("0.026"),
    pv_sachsen_an_extra=Decimal("0.005"),
    minijob_grenze=Decimal("556"),
    versicherungspflichtgrenze=Decimal("77400"),
)

#: Supported tax years. Add a new ``Steuerdaten`` each November once the
#: BMF publishes the Programmablaufplan for the following year.
STEUERDATEN: dict[int, Steuerdaten] = {
    2026: STEUERDATEN_2026,
}


def get_steuerdaten(jahr: int) -> Steuerdaten:
    """Return the constant set for ``jahr``.

    Raises:
        UnknownTaxYearError: if no data is available for that year.
    """
    try:
        return STEUERDATEN[jahr]
    except KeyError:
        supported = ", ".join(str(y) for y in sorted(STEUERDATEN))
        raise UnknownTaxYearError(
            f"No tax data for {jahr} (supported: {supported})"
        ) from None
