from __future__ import annotations

from datetime import date, datetime

import pytest

from tariff_dashboard.classifications import UnknownClassificationError
from tariff_dashboard.config import Settings
from tariff_dashboard.models import FilterSpec, TariffRecord
from tariff_dashboard.session import TariffSession, load_session


def _session() -> TariffSession:
    records = (
        TariffRecord(importer="USA", exporter="China", classification_code="41",
                     effective_date=datetime(2024, 1, 1), tariff_rate=2, trade_value_usd=100,
                     affected_trade_value_usd=5, affected_trade_share=50, affected_line_share=0.5),
        TariffRecord(importer="USA", exporter="Mexico", classification_code="41",
                     effective_date=datetime(2024, 1, 1), tariff_rate=10, trade_value_usd=300),
        TariffRecord(importer="USA", exporter="Mexico", classification_code="05",
                     effective_date=datetime(2024, 1, 2), tariff_rate=6, trade_value_usd=100),
    )
    return TariffSession(datasets={"isic": records})


def test_apply_world_view() -> None:
    view = _session().apply("isic", FilterSpec())
    assert view.title == "ISIC4 2 Digit Tariff Line"
    assert view.record_count == 3
    assert view.series.labels == ["1/1/2024", "1/2/2024"]
    assert view.series.series == {"World": [6.0, 6.0]}
    assert [(r.exporter, r.date_label) for r in view.summary] == [
        ("China", "1/1/2024"),
        ("Mexico", "1/1/2024"),
        ("Mexico", "1/2/2024"),
    ]
    assert view.summary[0].weighted_affected_share_percent == 50.0
    assert view.actions is not None
    assert view.actions.affected_record_count == 1


def test_apply_exporter_view_with_code() -> None:
    view = _session().apply("ISIC", FilterSpec(classification_code="41", exporters=["Mexico", "China"]))
    assert view.title == "ISIC4 2 Digit Tariff Line 41"
    assert view.series.labels == ["1/1/2024"]
    assert view.series.series == {"China": [2.0], "Mexico": [10.0]}
    assert view.actions.exporter_label == "2 exporters"


def test_apply_empty_result_is_not_an_error() -> None:
    view = _session().apply("isic", FilterSpec(date_from=date(2030, 1, 1)))
    assert view.record_count == 0
    assert view.series.is_empty
    assert view.summary == []
    assert view.actions is None


def test_unknown_or_unloaded_classification() -> None:
    session = _session()
    with pytest.raises(UnknownClassificationError):
        session.apply("cpc", FilterSpec())
    with pytest.raises(UnknownClassificationError):
        session.records("hs6")


def test_session_data_is_read_only() -> None:
    session = _session()
    with pytest.raises(TypeError):
        session.datasets["hs6"] = ()  # type: ignore[index]


def test_option_lists() -> None:
    session = _session()
    assert session.importers("isic") == ["World", "USA"]
    assert session.codes_for("isic", "USA") == ["05", "41"]
    assert session.exporters_for("isic") == ["China", "Mexico"]


def test_option_lists_limited_to_reference_lists() -> None:
    records = _session().datasets["isic"] + (
        TariffRecord(importer="USA", exporter="Atlantis", classification_code="99",
                     effective_date=datetime(2024, 1, 3), tariff_rate=1),
    )
    session = TariffSession(
        datasets={"isic": records},
        codes={"isic": ("05", "41", "77")},
        exporters=("China", "Mexico", "Japan"),
    )
    # reference-only values never appear; dataset values missing from the list are dropped
    assert session.codes_for("isic") == ["05", "41"]
    assert session.exporters_for("isic") == ["China", "Mexico"]
    assert session.exporters_for("isic", "USA") == ["China", "Mexico"]


def test_option_lists_from_loaded_reference_files(settings: Settings, data_dir) -> None:
    (data_dir / "hs6code.csv").write_text("hs6code\n010129\n", encoding="utf-8")
    (data_dir / "exporters.csv").write_text("exporter\nMexico\n", encoding="utf-8")
    session = load_session(settings, classifications=["hs6"])
    assert session.codes_for("hs6", "USA") == ["010129"]
    assert session.exporters_for("hs6") == ["Mexico"]


def test_option_lists_without_reference_files(settings: Settings, data_dir) -> None:
    (data_dir / "hs6code.csv").unlink()
    (data_dir / "exporters.csv").unlink()
    session = load_session(settings, classifications=["hs6"])
    assert session.codes_for("hs6", "USA") == ["010121", "010129"]
    assert session.exporters_for("hs6") == ["China", "Mexico"]


def test_apply_normalizes_selected_code() -> None:
    view = _session().apply("isic", FilterSpec(classification_code="4100"))
    assert view.record_count == 2
    assert view.spec.classification_code == "41"
    assert view.title == "ISIC4 2 Digit Tariff Line 41"

    view = _session().apply("isic", FilterSpec(classification_code="5"))
    assert view.record_count == 1
    assert view.series.labels == ["1/2/2024"]


def test_load_session_from_csv(settings: Settings) -> None:
    session = load_session(settings)
    assert session.classifications == ["isic", "hs6"]
    assert len(session.records("hs6")) == 5
    assert session.exporters == ("China", "Mexico")
    assert session.codes["isic"] == ("05", "41")
    assert session.codes["hs6"] == ("010121", "010129")

    view = session.apply("hs6", FilterSpec(importer="USA", date_from=date(2024, 1, 1)))
    # the undated USA row is excluded by the date bound
    assert view.record_count == 3
    assert view.series.series == {"World": [15.0, 5.0]}
    assert all(r.weighted_affected_share_percent == 100 for r in view.summary)


def test_load_session_missing_dataset(settings: Settings, data_dir) -> None:
    (data_dir / "hs6tariff.csv").unlink()
    with pytest.raises(FileNotFoundError):
        load_session(settings, classifications=["hs6"])
