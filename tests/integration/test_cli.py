"""CLI integration tests — commands run through typer's CliRunner.

All runs use an isolated config.json (see conftest), so defaults are
NRW, Steuerklasse I, GKV 2.9%, kinderlos, 30 Jahre.
"""

import json
from decimal import Decimal

import pytest
from typer.testing import CliRunner

from bruttonetto.cli.main import app
from bruttonetto.core.config import get_config
from bruttonetto.core.formatting import format_euro
from bruttonetto.core.tax import tarif_nach_klasse

runner = CliRunner()


def _ok(*args, **kwargs):
    result = runner.invoke(app, list(args), **kwargs)
    assert result.exit_code == 0, result.output
    return result


class TestNetto:
    def test_json_output(self):
        data = json.loads(_ok("netto", "3000", "--json").stdout)
        assert data["netto_monat"] == "2054.92"
        assert data["sv"]["summe_an"] == "649.50"
        assert data["hinweise"] == []

    def test_table_output(self):
        out = _ok("netto", "3000").stdout
        assert "2.054,92 €" in out
        assert "295,58 €" in out
        assert "Nordrhein-Westfalen" in out

    def test_german_amount_and_annual(self):
        data = json.loads(_ok("netto", "36.000,00", "--jahr", "--json").stdout)
        assert data["netto_monat"] == "2054.92"

    def test_german_thousands_without_decimals(self):
        data = json.loads(_ok("netto", "3.000", "--json").stdout)
        assert data["brutto_monat"] == "3000"
        assert data["netto_monat"] == "2054.92"

    def test_options(self):
        data = json.loads(
            _ok("netto", "3000", "-b", "Sachsen", "--kinder", "2", "--json").stdout
        )
        assert data["sv"]["pv"]["an"] == "58.50"

    def test_zusatzbeitrag_in_percent(self):
        data = json.loads(_ok("netto", "3000", "--zusatzbeitrag", "2.5", "--json").stdout)
        assert data["sv"]["kv"]["an"] == "256.50"

    def test_unknown_year_exits_1(self):
        result = runner.invoke(app, ["netto", "3000", "--steuerjahr", "2020"])
        assert result.exit_code == 1
        assert "2020" in result.output

    def test_invalid_amount_exits_1(self):
        result = runner.invoke(app, ["netto", "viel"])
        assert result.exit_code == 1

    def test_steuerklasse_out_of_range(self):
        result = runner.invoke(app, ["netto", "3000", "-k", "7"])
        assert result.exit_code != 0

    def test_minijob_note(self):
        out = _ok("netto", "556").stdout
        assert "Minijob" in out


class TestLohnsteuer:
    def test_class_1(self):
        out = _ok("lohnsteuer", "36000").stdout
        assert "3.547,00 €" in out
        assert "27.588,00 €" in out

    def test_class_6_warning(self):
        out = _ok("lohnsteuer", "36000", "-k", "6").stdout
        assert "5.971,00 €" in out
        assert "Steuerklasse V/VI" in out

    def test_kirchensteuer_bayern(self):
        out = _ok("lohnsteuer", "60000", "--kirche", "-b", "Bayern").stdout
        assert "756,00 €" in out


class TestSV:
    def test_above_ceiling(self):
        out = _ok("sv", "10000").stdout
        assert "508,59 €" in out
        assert "1.537,98 €" in out

    def test_privat(self):
        out = _ok("sv", "6000", "--kv", "privat", "--pkv-beitrag", "800").stdout
        assert "400,00 €" in out


class TestEst:
    def test_grundtarif(self):
        out = _ok("est", "100000").stdout
        assert "30.864,00 €" in out
        assert "42,00 %" in out

    def test_splitting(self):
        out = _ok("est", "30794", "--splitting").stdout
        assert "1.022,00 €" in out

    def test_splitting_matches_class_3_tariff(self):
        out = _ok("est", "61001", "--splitting").stdout
        assert format_euro(tarif_nach_klasse(Decimal("61001"), 3)) in out

    def test_unknown_year(self):
        assert runner.invoke(app, ["est", "50000", "--steuerjahr", "2031"]).exit_code == 1


class TestConfigCommands:
    def test_set_and_use(self):
        _ok("config", "set", "bundesland", "Bayern")
        assert get_config().bundesland == "Bayern"
        data = json.loads(_ok("netto", "60000", "--jahr", "--kirche", "--json").stdout)
        assert data["steuern_jahr"]["kirchensteuer"] == "756.00"

    def test_set_invalid(self):
        result = runner.invoke(app, ["config", "set", "steuerklasse", "9"])
        assert result.exit_code == 1
        assert get_config().steuerklasse == 1

    def test_show(self):
        out = _ok("config", "show").stdout
        assert "bundesland" in out
        assert "Nordrhein-Westfalen" in out


def test_setup_wizard_saves_answers():
    answers = "\n".join([
        "",      # name
        "",      # Bundesland (keep NRW)
        "3",     # Steuerklasse
        "n",     # Kirchensteuer
        "",      # Krankenversicherung (gesetzlich)
        "",      # Zusatzbeitrag 2.9
        "2",     # Kinder unter 25
        "1",     # Kinderfreibeträge
        "",      # Alter
        "y",     # save
    ]) + "\n"
    _ok("setup", "run", input=answers)
    cfg = get_config()
    assert cfg.steuerklasse == 3
    assert cfg.bundesland == "Nordrhein-Westfalen"
    assert cfg.kinder_unter_25 == 2
    assert cfg.kinderfreibetrag == 1


@pytest.mark.parametrize("args", [["--help"], ["netto", "--help"], ["config", "--help"]])
def test_help(args):
    _ok(*args)
