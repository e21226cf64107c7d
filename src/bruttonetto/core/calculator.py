"""Brutto-Netto calculation — combines wage tax and social insurance.

Single-pass, stateless pipeline:
  1. Normalize the entered gross to monthly and annual figures.
  2. Annual Lohnsteuer/Soli/KiSt (``core.tax``), divided by 12.
  3. Monthly Sozialversicherung (``core.sozialversicherung``) on gross
     plus geldwerter Vorteil.
  4. Netto = Brutto − Steuern − SV-Arbeitnehmeranteil.
  5. Quoten as a percentage of the monthly gross.
"""

from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Optional

from .models import BruttoNettoInput, Krankenversicherung, LohnsteuerProfil, SVProfil, Zeitraum
from .rounding import ZERO, non_negative, round_cent
from .sozialversicherung import SVResult, berechne_sozialversicherung
from .tax import LohnsteuerResult, Steuerdaten, berechne_lohnsteuer, get_steuerdaten


@dataclass
class SteuernMonat:
    lohnsteuer: Decimal = ZERO
    soli: Decimal = ZERO
    kirchensteuer: Decimal = ZERO
    gesamt: Decimal = ZERO


@dataclass
class BruttoNettoResult:
    """Full gross-to-net breakdown."""

    brutto_monat: Decimal
    brutto_jahr: Decimal
    steuern_jahr: LohnsteuerResult
    steuern_monat: SteuernMonat
    sv: SVResult
    abzuege_monat: Decimal = ZERO
    abzuege_jahr: Decimal = ZERO
    netto_monat: Decimal = ZERO
    netto_jahr: Decimal = ZERO
    steuerquote: Decimal = ZERO   #: Steuern / Brutto × 100
    svquote: Decimal = ZERO       #: SV-Arbeitnehmeranteil / Brutto × 100
    nettoquote: Decimal = ZERO    #: Netto / Brutto × 100
    hinweise: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-friendly representation; Decimals become strings."""
        return _stringify(asdict(self))


def _stringify(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: _stringify(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_stringify(v) for v in value]
    return value


def _quote(teil: Decimal, brutto_monat: Decimal) -> Decimal:
    if brutto_monat <= 0:
        return round_cent(ZERO)
    return round_cent(teil / brutto_monat * 100)


def pruefe_hinweise(
    brutto_monat: Decimal,
    brutto_jahr: Decimal,
    krankenversicherung: Krankenversicherung,
    daten: Steuerdaten,
) -> list[str]:
    """Advisory notes for inputs the simplified calculation does not model."""
    hinweise = []
    if 0 < brutto_monat <= daten.minijob_grenze:
        hinweise.append(
            f"Brutto bis {daten.minijob_grenze} € im Monat: Minijob-Sonderregeln "
            "(Pauschalabgaben) sind nicht berücksichtigt."
        )
    if (
        krankenversicherung == Krankenversicherung.PRIVAT
        and brutto_jahr < daten.versicherungspflichtgrenze
    ):
        hinweise.append(
            f"Jahresbrutto unter der Versicherungspflichtgrenze ({daten.versicherungspflichtgrenze} €): "
            "private Krankenversicherung ist in der Regel nicht möglich."
        )
    return hinweise


def brutto_netto(
    eingabe: BruttoNettoInput,
    daten: Optional[Steuerdaten] = None,
) -> BruttoNettoResult:
    """Calculate the full gross-to-net breakdown.

    Args:
        eingabe: Form input; ``brutto`` is monthly or annual per ``zeitraum``.
        daten: Constant set; defaults to the data for ``eingabe.steuerjahr``.

    Returns:
        BruttoNettoResult with monthly and annual taxes, contributions,
        net income and the three Quoten.

    Raises:
        UnknownTaxYearError: if ``daten`` is omitted and no data exists for
            ``eingabe.steuerjahr``.
    """
    if daten is None:
        daten = get_steuerdaten(eingabe.steuerjahr)

    brutto = non_negative(eingabe.brutto)
    if eingabe.zeitraum == Zeitraum.JAHR:
        brutto_monat = brutto / 12
        brutto_jahr = brutto
    else:
        brutto_monat = brutto
        brutto_jahr = brutto * 12

    steuern = berechne_lohnsteuer(
        LohnsteuerProfil(
            brutto_jahr=brutto_jahr,
            steuerklasse=eingabe.steuerklasse,
            kirchensteuer=eingabe.kirchensteuer,
            bundesland=eingabe.bundesland,
            kinderfreibetrag=eingabe.kinderfreibetrag,
            steuerfreibetrag=eingabe.steuerfreibetrag,
            geldwerter_vorteil=eingabe.geldwerter_vorteil,
        ),
        daten,
    )
    steuern_monat = SteuernMonat(
        lohnsteuer=round_cent(steuern.lohnsteuer / 12),
        soli=round_cent(steuern.soli / 12),
        kirchensteuer=round_cent(steuern.kirchensteuer / 12),
        gesamt=round_cent(steuern.gesamt / 12),
    )

    sv = berechne_sozialversicherung(
        SVProfil(
            brutto_monat=brutto_monat + non_negative(eingabe.geldwerter_vorteil),
            bundesland=eingabe.bundesland,
            krankenversicherung=eingabe.krankenversicherung,
            kv_zusatzbeitrag=eingabe.kv_zusatzbeitrag,
            pkv_beitrag=eingabe.pkv_beitrag,
            arbeitgeberzuschuss_pkv=eingabe.arbeitgeberzuschuss_pkv,
            rentenversichert=eingabe.rentenversichert,
            arbeitslosenversichert=eingabe.arbeitslosenversichert,
            kinder_anzahl=eingabe.kinder_unter_25,
            hat_kinder=eingabe.hat_kinder,
            alter=eingabe.alter,
        ),
        daten,
    )

    abzuege_monat = round_cent(steuern_monat.gesamt + sv.summe_an)
    netto_monat = round_cent(brutto_monat - abzuege_monat)

    return BruttoNettoResult(
        brutto_monat=brutto_monat,
        brutto_jahr=brutto_jahr,
        steuern_jahr=steuern,
        steuern_monat=steuern_monat,
        sv=sv,
        abzuege_monat=abzuege_monat,
        abzuege_jahr=round_cent(abzuege_monat * 12),
        netto_monat=netto_monat,
        netto_jahr=round_cent(netto_monat * 12),
        steuerquote=_quote(steuern_monat.gesamt, brutto_monat),
        svquote=_quote(sv.summe_an, brutto_monat),
        nettoquote=_quote(netto_monat, brutto_monat),
        hinweise=pruefe_hinweise(brutto_monat, brutto_jahr, eingabe.krankenversicherung, daten),
    )
