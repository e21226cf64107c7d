"""Sozialversicherung — monthly employee and employer contributions.

Four branches, each charged on the gross up to its Beitragsbemessungsgrenze:

  KV  Krankenversicherung     (14.6% + Zusatzbeitrag, split 50/50)    BBG KV
  PV  Pflegeversicherung      (3.6%, employee share by children)      BBG KV
  RV  Rentenversicherung      (18.6%, split 50/50)                    BBG RV
  AV  Arbeitslosenversicherung (2.6%, split 50/50)                    BBG RV

Privately insured employees (PKV) pay their premium in full and may get an
employer subsidy of at most half of what the statutory KV would cost. They
are outside the statutory PV calculation.

In Sachsen the employee pays 0.5% more PV and the employer 0.5% less
(Buß- und Bettag was kept as a public holiday).

Every line item is rounded half away from zero to the cent.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .models import Krankenversicherung, SVProfil, land_name
from .rounding import ZERO, non_negative, round_cent
from .tax.steuerdaten import STEUERDATEN_2026, Steuerdaten


@dataclass
class Beitrag:
    an: Decimal = ZERO  # Arbeitnehmer
    ag: Decimal = ZERO  # Arbeitgeber


@dataclass
class SVResult:
    kv: Beitrag = field(default_factory=Beitrag)
    pv: Beitrag = field(default_factory=Beitrag)
    rv: Beitrag = field(default_factory=Beitrag)
    av: Beitrag = field(default_factory=Beitrag)
    summe_an: Decimal = ZERO
    summe_ag: Decimal = ZERO

    def zweige(self) -> dict[str, Beitrag]:
        return {"kv": self.kv, "pv": self.pv, "rv": self.rv, "av": self.av}


def pv_arbeitnehmer_satz(
    kinder_anzahl: int,
    hat_kinder: bool,
    alter: int,
    bundesland: str,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> Decimal:
    """Employee PV rate (§ 55 SGB XI).

    Childless members aged 23+ pay the surcharge. Parents pay the base rate
    for the first child and get a discount for each further child under 25,
    up to the fifth.
    """
    if not hat_kinder and alter >= 23:
        satz = daten.pv_an_satz[0]
    else:
        satz = daten.pv_an_satz[min(max(kinder_anzahl, 1), 5)]
    if land_name(bundesland) == daten.pv_sonderland:
        satz += daten.pv_sachsen_an_extra
    return satz


def _kv_halbsatz(zusatzbeitrag: Decimal, daten: Steuerdaten) -> Decimal:
    return daten.kv_satz / 2 + non_negative(zusatzbeitrag) / 2


def berechne_sozialversicherung(
    profil: SVProfil,
    daten: Steuerdaten = STEUERDATEN_2026,
) -> SVResult:
    """Calculate monthly contributions for all four branches.

    Args:
        profil: Monthly gross and insurance parameters.
        daten: Constant set for the tax year.

    Returns:
        SVResult with per-branch employee/employer amounts and both sums.
    """
    brutto = non_negative(profil.brutto_monat)
    basis_kv = min(brutto, daten.bbg_kv_monat)
    basis_rv = min(brutto, daten.bbg_rv_monat)
    result = SVResult()

    # ── Krankenversicherung ──
    if profil.krankenversicherung in (Krankenversicherung.GESETZLICH, Krankenversicherung.FREIWILLIG):
        halbsatz = _kv_halbsatz(profil.kv_zusatzbeitrag, daten)
        result.kv = Beitrag(an=round_cent(basis_kv * halbsatz), ag=round_cent(basis_kv * halbsatz))
    elif profil.krankenversicherung == Krankenversicherung.PRIVAT:
        pkv = non_negative(profil.pkv_beitrag)
        result.kv.an = round_cent(pkv)
        if profil.arbeitgeberzuschuss_pkv:
            max_zuschuss = basis_kv * _kv_halbsatz(daten.kv_zusatz_default, daten)
            result.kv.ag = round_cent(min(pkv / 2, max_zuschuss))
        else:
            result.kv.ag = round_cent(ZERO)

    # ── Pflegeversicherung ──
    if profil.krankenversicherung != Krankenversicherung.PRIVAT:
        an_satz = pv_arbeitnehmer_satz(
            profil.kinder_anzahl, profil.hat_kinder, profil.alter, profil.bundesland, daten
        )
        result.pv = Beitrag(
            an=round_cent(basis_kv * an_satz),
            ag=round_cent(basis_kv * (daten.pv_satz - an_satz)),
        )

    # ── Rentenversicherung ──
    if profil.rentenversichert:
        rv = round_cent(basis_rv * daten.rv_satz / 2)
        result.rv = Beitrag(an=rv, ag=rv)

    # ── Arbeitslosenversicherung (shares the RV ceiling) ──
    if profil.arbeitslosenversichert:
        av = round_cent(basis_rv * daten.av_satz / 2)
        result.av = Beitrag(an=av, ag=av)

    result.summe_an = round_cent(sum((b.an for b in result.zweige().values()), ZERO))
    result.summe_ag = round_cent(sum((b.ag for b in result.zweige().values()), ZERO))
    return result
