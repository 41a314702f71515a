from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tariff_dashboard.classifications import HS6, ISIC, chart_title, get_classification
from tariff_dashboard.config import DEFAULT_COLUMNS, get_settings


def test_get_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TARIFF_DATA_DIR", "TARIFF_TRADE_VALUE_SCALE", "TARIFF_LOG_LEVEL", "TARIFF_HS6_FILE"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.data_dir == Path("data")
    assert s.trade_value_scale == 1000.0
    assert s.path(s.hs6_tariff_file) == Path("data") / "hs6tariff.csv"
    assert s.level == logging.INFO


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TARIFF_DATA_DIR", "/srv/tariffs")
    monkeypatch.setenv("TARIFF_TRADE_VALUE_SCALE", "1")
    monkeypatch.setenv("TARIFF_LOG_LEVEL", "debug")
    s = get_settings()
    assert s.data_dir == Path("/srv/tariffs")
    assert s.trade_value_scale == 1.0
    assert s.level == logging.DEBUG


@pytest.mark.parametrize("raw", ["0", "-5", "lots"])
def test_get_settings_rejects_bad_scale(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("TARIFF_TRADE_VALUE_SCALE", raw)
    with pytest.raises(RuntimeError):
        get_settings()


def test_classification_profiles() -> None:
    assert get_classification(" HS6 ") is HS6
    assert ISIC.columns().code == "isic4_2"
    assert ISIC.columns(scale=1.0).trade_value_scale == 1.0
    assert DEFAULT_COLUMNS.code == "hs6"
    assert chart_title(HS6, "010121") == "HS6 Tariff Line 010121"
    assert chart_title(ISIC) == "ISIC4 2 Digit Tariff Line"
