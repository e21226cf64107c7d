"""Tests for core.sozialversicherung.

Reference case: 3000 €/Monat, GKV, Zusatzbeitrag 2.9%, NRW, kinderlos, 30 Jahre.
  KV  3000 × (7.3% + 1.45%)  = 262.50 / 262.50
  PV  3000 × 2.3% | 1.3%     =  69.00 /  39.00
  RV  3000 × 9.3%            = 279.00 / 279.00
  AV  3000 × 1.3%            =  39.00 /  39.00
  Summe                      = 649.50 / 619.50
"""

from decimal import Decimal

import pytest

from bruttonetto.core.exceptions import InvalidInputError
from bruttonetto.core.models import Bundesland, Krankenversicherung, SVProfil
from bruttonetto.core.sozialversicherung import berechne_sozialversicherung, pv_arbeitnehmer_satz


def _sv(brutto, **kwargs):
    return berechne_sozialversicherung(SVProfil(brutto_monat=Decimal(str(brutto)), **kwargs))


class TestGesetzlich:
    def test_reference_case(self):
        r = _sv(3000)
        assert (r.kv.an, r.kv.ag) == (Decimal("262.50"), Decimal("262.50"))
        assert (r.pv.an, r.pv.ag) == (Decimal("69.00"), Decimal("39.00"))
        assert (r.rv.an, r.rv.ag) == (Decimal("279.00"), Decimal("279.00"))
        assert (r.av.an, r.av.ag) == (Decimal("39.00"), Decimal("39.00"))
        assert r.summe_an == Decimal("649.50")
        assert r.summe_ag == Decimal("619.50")

    def test_freiwillig_same_as_gesetzlich(self):
        assert _sv(4500, krankenversicherung="freiwillig") == _sv(4500)

    def test_capped_at_beitragsbemessungsgrenzen(self):
        # KV/PV on 5812.50, RV/AV on 8450
        r = _sv(10000)
        assert r.kv.an == Decimal("508.59")
        assert r.pv.an == Decimal("133.69")
        assert r.pv.ag == Decimal("75.56")
        assert r.rv.an == Decimal("785.85")
        assert r.av.an == Decimal("109.85")
        assert r.summe_an == Decimal("1537.98")
        assert r.summe_ag == Decimal("1479.85")

    def test_above_ceiling_is_constant(self):
        assert _sv(10000) == _sv(25000)

    def test_custom_zusatzbeitrag(self):
        # 3000 × (7.3% + 1.25%) = 256.50
        assert _sv(3000, kv_zusatzbeitrag=Decimal("0.025")).kv.an == Decimal("256.50")

    def test_minijob_boundary(self):
        r = _sv(556)
        assert r.kv.an == Decimal("48.65")
        assert r.pv.an == Decimal("12.79")
        assert r.rv.an == Decimal("51.71")
        assert r.av.an == Decimal("7.23")
        assert r.summe_an == Decimal("120.38")

    def test_zero_and_negative_gross(self):
        for brutto in (0, -100):
            r = _sv(brutto)
            assert r.summe_an == Decimal("0.00")
            assert r.summe_ag == Decimal("0.00")

    def test_without_rv_and_av(self):
        r = _sv(3000, rentenversichert=False, arbeitslosenversichert=False)
        assert r.rv.an == Decimal("0")
        assert r.av.an == Decimal("0")
        assert r.summe_an == Decimal("331.50")


class TestPflegeversicherung:
    def test_sachsen_childless(self):
        r = _sv(3000, bundesland=Bundesland.SACHSEN)
        assert r.pv.an == Decimal("84.00")
        assert r.pv.ag == Decimal("24.00")

    def test_sachsen_as_plain_string(self):
        assert _sv(3000, bundesland="Sachsen").pv.an == Decimal("84.00")

    def test_two_children(self):
        r = _sv(3000, kinder_anzahl=2, hat_kinder=True)
        assert r.pv.an == Decimal("43.50")
        assert r.pv.ag == Decimal("64.50")

    def test_five_or_more_children(self):
        assert _sv(3000, kinder_anzahl=5, hat_kinder=True).pv.an == Decimal("21.00")
        assert _sv(3000, kinder_anzahl=7, hat_kinder=True).pv.an == Decimal("21.00")

    def test_young_childless_no_surcharge(self):
        assert _sv(3000, alter=22).pv.an == Decimal("51.00")

    def test_parent_without_children_under_25(self):
        assert _sv(3000, kinder_anzahl=0, hat_kinder=True, alter=60).pv.an == Decimal("51.00")

    def test_total_rate_always_split_fully(self):
        for kinder in range(6):
            r = _sv(3000, kinder_anzahl=kinder, hat_kinder=kinder > 0)
            assert r.pv.an + r.pv.ag == Decimal("108.00")

    @pytest.mark.parametrize(
        "kinder, hat_kinder, alter, expected",
        [
            (0, False, 30, "0.023"),
            (0, False, 22, "0.017"),
            (1, True, 30, "0.017"),
            (3, True, 40, "0.012"),
            (4, True, 40, "0.0095"),
        ],
    )
    def test_rate_table(self, kinder, hat_kinder, alter, expected):
        assert pv_arbeitnehmer_satz(kinder, hat_kinder, alter, "Hessen") == Decimal(expected)


class TestPrivat:
    def test_subsidy_is_half_the_premium(self):
        r = _sv(6000, krankenversicherung=Krankenversicherung.PRIVAT, pkv_beitrag=800)
        assert r.kv.an == Decimal("800.00")
        assert r.kv.ag == Decimal("400.00")

    def test_subsidy_capped_at_statutory_half(self):
        r = _sv(6000, krankenversicherung="privat", pkv_beitrag=1200)
        assert r.kv.ag == Decimal("508.59")

    def test_without_employer_subsidy(self):
        r = _sv(6000, krankenversicherung="privat", pkv_beitrag=800, arbeitgeberzuschuss_pkv=False)
        assert r.kv.ag == Decimal("0.00")

    def test_no_statutory_pv(self):
        r = _sv(6000, krankenversicherung="privat", pkv_beitrag=800)
        assert r.pv.an == Decimal("0")
        assert r.pv.ag == Decimal("0")


class TestValidation:
    def test_unknown_krankenversicherung(self):
        with pytest.raises(InvalidInputError, match="krankenversicherung"):
            SVProfil(brutto_monat=Decimal("3000"), krankenversicherung="beihilfe")

    def test_non_numeric_gross(self):
        with pytest.raises(InvalidInputError):
            SVProfil(brutto_monat="viel")


class TestNegativeInputsClamped:
    def test_negative_zusatzbeitrag_treated_as_zero(self):
        # 3000 × 7.3% = 219.00
        r = _sv(3000, kv_zusatzbeitrag=Decimal("-0.2"))
        assert r.kv.an == Decimal("219.00")
        assert r.kv.ag == Decimal("219.00")

    def test_no_negative_contribution(self):
        r = _sv(3000, kv_zusatzbeitrag=-1, pkv_beitrag=-50)
        for beitrag in r.zweige().values():
            assert beitrag.an >= 0
            assert beitrag.ag >= 0
