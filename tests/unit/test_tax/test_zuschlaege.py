"""Tests for core.tax.zuschlaege.

  Soli = min(5.5% × Steuer, 11.9% × (Steuer − Freigrenze)) above the Freigrenze
  Freigrenze 18130 (single) / 36260 (Steuerklasse III)
  KiSt = 8% (BY, BW) / 9% (others) × Steuer
  Both truncated to the cent.
"""

import logging
from decimal import Decimal

import pytest

from bruttonetto.core.models import Bundesland
from bruttonetto.core.tax.zuschlaege import (
    calculate_kirchensteuer,
    calculate_soli,
    kirchensteuer_satz,
    soli_freigrenze,
)


class TestSoliFreigrenze:
    def test_single(self):
        assert soli_freigrenze(1) == Decimal("18130")

    def test_married(self):
        assert soli_freigrenze(3) == Decimal("36260")

    @pytest.mark.parametrize("klasse", [2, 4, 5, 6])
    def test_other_classes_use_single_threshold(self, klasse):
        assert soli_freigrenze(klasse) == Decimal("18130")


class TestCalculateSoli:
    def test_zero_below_threshold(self):
        assert calculate_soli(Decimal("10000"), 1) == Decimal("0.00")

    def test_zero_at_threshold(self):
        assert calculate_soli(Decimal("18130"), 1) == Decimal("0.00")

    def test_positive_one_euro_above_threshold(self):
        # Milderungszone: 1 × 0.119 = 0.119 → 0.11
        assert calculate_soli(Decimal("18131"), 1) == Decimal("0.11")

    def test_married_threshold(self):
        assert calculate_soli(Decimal("36260"), 3) == Decimal("0.00")
        assert calculate_soli(Decimal("36261"), 3) == Decimal("0.11")

    def test_single_threshold_does_not_apply_to_class_3(self):
        assert calculate_soli(Decimal("30000"), 3) == Decimal("0.00")
        assert calculate_soli(Decimal("30000"), 1) > 0

    def test_milderungszone(self):
        # 31680: full 1742.40, Milderung 13550 × 0.119 = 1612.45
        assert calculate_soli(Decimal("31680"), 1) == Decimal("1612.45")

    def test_truncated_not_rounded(self):
        # 5355 × 0.119 = 637.245 → 637.24
        assert calculate_soli(Decimal("23485"), 1) == Decimal("637.24")

    def test_full_rate_far_above_threshold(self):
        # 100000 × 0.055 = 5500 < 81870 × 0.119
        assert calculate_soli(Decimal("100000"), 1) == Decimal("5500.00")


class TestKirchensteuer:
    def test_rates(self):
        assert kirchensteuer_satz(Bundesland.BAYERN) == Decimal("0.08")
        assert kirchensteuer_satz("Baden-Württemberg") == Decimal("0.08")
        assert kirchensteuer_satz("Berlin") == Decimal("0.09")
        assert kirchensteuer_satz(Bundesland.NORDRHEIN_WESTFALEN) == Decimal("0.09")

    def test_all_laender_covered(self):
        for land in Bundesland:
            assert kirchensteuer_satz(land) in (Decimal("0.08"), Decimal("0.09"))

    def test_unknown_land_falls_back_to_nine_percent(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert kirchensteuer_satz("Atlantis") == Decimal("0.09")
        assert "Atlantis" in caplog.text

    def test_amount(self):
        assert calculate_kirchensteuer(Decimal("9450"), "Bayern") == Decimal("756.00")
        assert calculate_kirchensteuer(Decimal("9450"), "Berlin") == Decimal("850.50")

    def test_truncated(self):
        # 1111 × 0.09 = 99.99; 12.5 × 0.09 = 1.125 → 1.12
        assert calculate_kirchensteuer(Decimal("1111"), "Hessen") == Decimal("99.99")
        assert calculate_kirchensteuer(Decimal("12.5"), "Hessen") == Decimal("1.12")
