"""Summary table aggregation.

Functions in this module group filtered records by (exporter, day) and
compute the per-group statistics shown in the summary table:

- simple and trade-weighted average tariff
- summed affected trade value
- trade-weighted affected trade share (percent)
- average affected tariff-line share (percent)

Tariff-line datasets have no line-level share detail; for them both share
columns are the literal `FIXED_SHARE_PERCENT` rather than computed.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import pandas as pd

from tariff_dashboard.clean.parsing import normalize_fraction
from tariff_dashboard.models import SummaryRow, TariffRecord

log = logging.getLogger(__name__)

FIXED_SHARE_PERCENT = 100.0

SUMMARY_COLUMNS = [
    "Exporter",
    "Date",
    "Avg Tariff (%)",
    "Weighted Avg Tariff (%)",
    "Affected Trade Value (USD)",
    "Affected Trade Share (%)",
    "Affected Tariff Line Share (%)",
]


def finite(value: float) -> float:
    """Return `value`, or 0.0 when it is NaN or infinite."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def to_fixed_safe(value: object, digits: int) -> str:
    """Format a number with `digits` decimals; non-finite values print as 0."""
    return f"{finite(value):.{digits}f}"  # type: ignore[arg-type]


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def summarize(records: Iterable[TariffRecord], fixed_shares: bool = False) -> list[SummaryRow]:
    """Aggregate records into one `SummaryRow` per (exporter, day).

    Args:
        records: Filtered records; those without an effective date are skipped.
        fixed_shares: Report both share columns as exactly 100% instead of
            computing them.

    Returns:
        Rows in order of each group's first occurrence. Empty input gives
        an empty list.
    """
    rows: list[dict[str, object]] = []
    for r in records:
        day = r.day
        if day is None:
            continue
        rows.append(
            {
                "exporter": r.exporter,
                "date_label": r.date_label,
                "day": day,
                "tariff": r.tariff_rate,
                "trade_value": r.trade_value_usd,
                "weighted": r.tariff_rate * r.trade_value_usd,
                "affected": r.affected_trade_value_usd,
                "weighted_share": normalize_fraction(r.affected_trade_share) * r.trade_value_usd,
                "line_share": normalize_fraction(r.affected_line_share),
            }
        )

    if not rows:
        return []

    df = pd.DataFrame(rows)
    grouped = (
        df.groupby(["exporter", "date_label"], sort=False)
        .agg(
            day=("day", "first"),
            record_count=("tariff", "size"),
            simple_average=("tariff", "mean"),
            weighted_sum=("weighted", "sum"),
            trade_value_total=("trade_value", "sum"),
            affected_total=("affected", "sum"),
            weighted_share_sum=("weighted_share", "sum"),
            line_share_mean=("line_share", "mean"),
        )
        .reset_index()
    )

    out: list[SummaryRow] = []
    for g in grouped.to_dict(orient="records"):
        tv = finite(g["trade_value_total"])
        if fixed_shares:
            share_pct = FIXED_SHARE_PERCENT
            line_pct = FIXED_SHARE_PERCENT
        else:
            share_pct = finite(100 * _ratio(finite(g["weighted_share_sum"]), tv))
            line_pct = finite(100 * finite(g["line_share_mean"]))

        out.append(
            SummaryRow(
                exporter=str(g["exporter"]),
                date_label=str(g["date_label"]),
                effective_date=g["day"],
                record_count=int(g["record_count"]),
                simple_average_tariff=finite(g["simple_average"]),
                weighted_average_tariff=finite(_ratio(finite(g["weighted_sum"]), tv)),
                affected_trade_value_total=finite(g["affected_total"]),
                weighted_affected_share_percent=share_pct,
                average_line_share_percent=line_pct,
            )
        )

    log.debug("summarize produced %d groups from %d records", len(out), len(rows))
    return out


def summary_table(rows: Sequence[SummaryRow], fixed_shares: bool = False) -> pd.DataFrame:
    """Return the summary rows formatted for display.

    Tariffs and shares are rounded to two decimals, affected trade value to
    a whole number. Fixed shares render as the literal "100%".
    """
    records = []
    for r in rows:
        if fixed_shares:
            share, line = "100%", "100%"
        else:
            share = f"{to_fixed_safe(r.weighted_affected_share_percent, 2)}%"
            line = f"{to_fixed_safe(r.average_line_share_percent, 2)}%"
        records.append(
            [
                r.exporter,
                r.date_label,
                to_fixed_safe(r.simple_average_tariff, 2),
                to_fixed_safe(r.weighted_average_tariff, 2),
                to_fixed_safe(r.affected_trade_value_total, 0),
                share,
                line,
            ]
        )
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)
