"""Time-bucketed series for the tariff chart.

`build_series` groups records by calendar day, and optionally by a series
key such as the exporter, and averages a numeric field per bucket. All
series share one date-sorted label axis; a day on which a series has no
data is a gap (`None`), never zero.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

import pandas as pd

from tariff_dashboard.clean.parsing import format_date_label
from tariff_dashboard.models import WORLD, SeriesResult, TariffRecord

log = logging.getLogger(__name__)

SeriesKey = Callable[[TariffRecord], "str | None"]
ValueFn = Callable[[TariffRecord], float]


def world_key(record: TariffRecord) -> str | None:
    """Series key for aggregate mode: every record in one series."""
    return None


def exporter_key(record: TariffRecord) -> str | None:
    return record.exporter


def tariff_rate(record: TariffRecord) -> float:
    return record.tariff_rate


def build_series(
    records: Iterable[TariffRecord],
    series_key: SeriesKey | None = None,
    value: ValueFn = tariff_rate,
) -> SeriesResult:
    """Return per-day means of `value`, one series per key.

    Args:
        records: Filtered records; those without an effective date are skipped.
        series_key: Maps a record to its series name. When omitted, or when
            it returns None for every record, a single `World` series is
            built. Otherwise records keyed None are skipped.
        value: Numeric field to average (defaults to the tariff rate).

    Returns:
        `SeriesResult` with labels sorted by date, and series in order of
        first appearance. Empty input gives empty labels and series.
    """
    key_fn = series_key or world_key

    rows: list[dict[str, object]] = []
    undated = 0
    for r in records:
        day = r.day
        if day is None:
            undated += 1
            continue
        rows.append({"day": day, "key": key_fn(r), "value": value(r)})

    if undated:
        log.debug("build_series skipped %d records without a date", undated)

    if not rows:
        return SeriesResult()

    df = pd.DataFrame(rows)
    if df["key"].isna().all():
        df["key"] = WORLD
    else:
        df = df[df["key"].notna()]

    days = sorted(df["day"].unique())
    keys = list(dict.fromkeys(df["key"]))

    means = (
        df.groupby(["key", "day"], sort=False)["value"]
        .mean()
        .unstack("day")
        .reindex(index=keys, columns=days)
    )

    series = {
        str(key): [None if pd.isna(v) else float(v) for v in means.loc[key].tolist()]
        for key in keys
    }
    return SeriesResult(
        labels=[format_date_label(d) for d in days],
        dates=list(days),
        series=series,
    )
