"""Pydantic models shared by the normalizer, the aggregators and the sinks.

`TariffRecord` is the normalized unit of data; `FilterSpec` is the single
parameter surface of a filter interaction; `SeriesResult`, `SummaryRow` and
`ActionSummary` are the outputs handed to the chart, table and overview.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator

from tariff_dashboard.clean.parsing import clean_text, format_date_label, parse_date

WORLD = "World"


class TariffRecord(BaseModel):
    """Schema for one normalized tariff row.

    Attributes:
        importer: Importing party; "" when absent.
        exporter: Exporting party; "" when absent.
        classification_code: Normalized product/industry code; "" when absent.
        effective_date: Effective date of the rate, or None if unparseable.
        tariff_rate: Applied tariff in percent (not clamped).
        trade_value_usd: Import value in USD.
        affected_trade_value_usd: Part of the trade value under a measure.
        affected_trade_share: Raw share, either a 0-1 fraction or 0-100 percent.
        affected_line_share: Raw tariff-line share, same convention.
        metadata: Extra source columns carried for display only.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")
    importer: str = ""
    exporter: str = ""
    classification_code: str = ""
    effective_date: datetime | None = None
    tariff_rate: float = 0.0
    trade_value_usd: float = 0.0
    affected_trade_value_usd: float = 0.0
    affected_trade_share: float = 0.0
    affected_line_share: float = 0.0
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def day(self) -> date | None:
        """Calendar day of the effective date (time of day dropped)."""
        if self.effective_date is None:
            return None
        return self.effective_date.date()

    @property
    def date_label(self) -> str | None:
        day = self.day
        return format_date_label(day) if day is not None else None


class FilterSpec(BaseModel):
    """Filter selection assembled by the calling layer.

    An empty `exporters` set means world mode (all exporters aggregated),
    not "match nothing".
    """
    model_config = ConfigDict(frozen=True)
    importer: str = WORLD
    classification_code: str | None = None
    exporters: frozenset[str] = frozenset()
    date_from: date | None = None
    date_to: date | None = None

    @field_validator("importer", mode="before")
    @classmethod
    def _importer_default(cls, v: Any) -> str:
        return clean_text(v) or WORLD

    @field_validator("classification_code", mode="before")
    @classmethod
    def _blank_code_is_none(cls, v: Any) -> str | None:
        return clean_text(v) or None

    @field_validator("exporters", mode="before")
    @classmethod
    def _exporter_set(cls, v: Any) -> frozenset[str]:
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(e for e in (clean_text(x) for x in v) if e)

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _calendar_day(cls, v: Any) -> date | None:
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        parsed = parse_date(v)
        if parsed is None:
            raise ValueError(f"unrecognised date: {v!r}")
        return parsed.date()

    @property
    def world_mode(self) -> bool:
        return not self.exporters


class SeriesResult(BaseModel):
    """Chart-ready series aligned on a shared, date-sorted label axis.

    `None` entries are gaps: the series has no data on that label.
    """
    labels: list[str] = Field(default_factory=list)
    dates: list[date] = Field(default_factory=list)
    series: dict[str, list[float | None]] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.labels

    def to_frame(self) -> pd.DataFrame:
        """Return a long-format frame (`date`, `label`, `series`, `value`).

        Gaps are kept as NaN so chart sinks can break the line there.
        """
        rows = [
            {"date": d, "label": label, "series": name, "value": values[i]}
            for name, values in self.series.items()
            for i, (d, label) in enumerate(zip(self.dates, self.labels))
        ]
        frame = pd.DataFrame(rows, columns=["date", "label", "series", "value"])
        frame["date"] = pd.to_datetime(frame["date"])
        frame["value"] = pd.to_numeric(frame["value"], errors="coerce")
        return frame


class SummaryRow(BaseModel):
    """One (exporter, day) group of the summary table."""
    model_config = ConfigDict(frozen=True)
    exporter: str
    date_label: str
    effective_date: date
    record_count: int = Field(..., ge=0)
    simple_average_tariff: float
    weighted_average_tariff: float
    affected_trade_value_total: float
    weighted_affected_share_percent: float
    average_line_share_percent: float


class ActionSummary(BaseModel):
    """Overview of records touched by a trade measure in the current view."""
    model_config = ConfigDict(frozen=True)
    importer: str
    exporter_label: str
    classification_label: str
    date_range_label: str
    affected_record_count: int = Field(..., ge=0)


class DashboardView(BaseModel):
    """Everything the render sink needs for one filter interaction."""
    classification: str
    spec: FilterSpec
    title: str
    record_count: int = Field(..., ge=0)
    series: SeriesResult
    summary: list[SummaryRow]
    actions: ActionSummary | None = None
