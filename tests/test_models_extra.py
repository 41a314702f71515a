from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from tariff_dashboard.models import FilterSpec, SummaryRow, TariffRecord


def test_filter_spec_defaults_to_world_mode() -> None:
    spec = FilterSpec()
    assert spec.importer == "World"
    assert spec.exporters == frozenset()
    assert spec.world_mode


def test_filter_spec_coerces_inputs() -> None:
    spec = FilterSpec(
        importer="  ",
        classification_code="",
        exporters=[" China ", "", "Mexico"],
        date_from=datetime(2024, 1, 2, 15, 0),
        date_to="3/1/2024",
    )
    assert spec.importer == "World"
    assert spec.classification_code is None
    assert spec.exporters == frozenset({"China", "Mexico"})
    assert not spec.world_mode
    assert spec.date_from == date(2024, 1, 2)
    assert spec.date_to == date(2024, 3, 1)


def test_filter_spec_rejects_unreadable_date() -> None:
    with pytest.raises(ValidationError):
        FilterSpec(date_from="not a date")


def test_tariff_record_is_immutable() -> None:
    rec = TariffRecord(exporter="China", effective_date=datetime(2024, 1, 2, 8, 30))
    assert rec.day == date(2024, 1, 2)
    assert rec.date_label == "1/2/2024"
    with pytest.raises(ValidationError):
        rec.tariff_rate = 5.0  # type: ignore[misc]


def test_undated_record_has_no_label() -> None:
    assert TariffRecord().date_label is None


def test_summary_row_rejects_negative_count() -> None:
    with pytest.raises(ValidationError):
        SummaryRow(
            exporter="X",
            date_label="1/1/2024",
            effective_date=date(2024, 1, 1),
            record_count=-1,
            simple_average_tariff=0,
            weighted_average_tariff=0,
            affected_trade_value_total=0,
            weighted_affected_share_percent=0,
            average_line_share_percent=0,
        )
