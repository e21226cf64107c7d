"""Shared pytest fixtures for Brutto-Netto-Rechner tests."""

from decimal import Decimal

import pytest

from bruttonetto.core.config import set_config_path
from bruttonetto.core.models import BruttoNettoInput


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Each test gets its own config.json. Resets the cached config after."""
    path = tmp_path / "config.json"
    set_config_path(path)
    yield path
    set_config_path(None)


@pytest.fixture
def make_input():
    """Build a BruttoNettoInput with sensible defaults (NRW, class I, GKV)."""
    def _make(brutto, **overrides):
        return BruttoNettoInput(brutto=Decimal(str(brutto)), **overrides)
    return _make
