"""Row normalization.

`normalize_row` turns one raw CSV row into a `TariffRecord`. The batch
driver `normalize_frame` applies it partition-wise to a Dask DataFrame and
collects the records in source order.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import pandas as pd
from dask import delayed, compute  # type: ignore[attr-defined]

from tariff_dashboard.clean.parsing import (
    CodeMode,
    clean_text,
    normalize_code,
    parse_date,
    parse_number,
)
from tariff_dashboard.config import DEFAULT_COLUMNS, ColumnMap
from tariff_dashboard.models import TariffRecord

log = logging.getLogger(__name__)


def normalize_row(
    raw: Mapping[str, Any],
    code_mode: CodeMode = "full",
    columns: ColumnMap = DEFAULT_COLUMNS,
) -> TariffRecord:
    """Normalize a single raw row.

    Args:
        raw: Mapping of source column name to cell value.
        code_mode: `full` keeps the code as-is, `prefix2` reduces it to a
            two-digit prefix.
        columns: Source column names.

    Returns:
        An immutable `TariffRecord`. Bad cells fall back to defaults; this
        function does not raise for malformed input.
    """
    mapped = columns.mapped()
    metadata = {
        str(k): clean_text(v)
        for k, v in raw.items()
        if k not in mapped and clean_text(v)
    }

    return TariffRecord(
        importer=clean_text(raw.get(columns.importer)),
        exporter=clean_text(raw.get(columns.exporter)),
        classification_code=normalize_code(raw.get(columns.code), code_mode),
        effective_date=parse_date(raw.get(columns.date)),
        tariff_rate=parse_number(raw.get(columns.tariff_rate)),
        trade_value_usd=parse_number(raw.get(columns.trade_value)) * columns.trade_value_scale,
        affected_trade_value_usd=parse_number(raw.get(columns.affected_trade_value)),
        affected_trade_share=parse_number(raw.get(columns.affected_trade_share)),
        affected_line_share=parse_number(raw.get(columns.affected_line_share)),
        metadata=metadata,
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    code_mode: CodeMode = "full",
    columns: ColumnMap = DEFAULT_COLUMNS,
) -> tuple[TariffRecord, ...]:
    """Normalize an iterable of raw rows, preserving order."""
    return tuple(normalize_row(r, code_mode, columns) for r in rows)


def _normalize_partition(
    pdf: pd.DataFrame,
    code_mode: CodeMode,
    columns: ColumnMap,
) -> tuple[TariffRecord, ...]:
    """Runs inside a worker (delayed task)."""
    if pdf is None or len(pdf) == 0:
        return ()
    return normalize_rows(pdf.to_dict(orient="records"), code_mode, columns)


def normalize_frame(
    ddf: Any,
    code_mode: CodeMode = "full",
    columns: ColumnMap = DEFAULT_COLUMNS,
) -> tuple[TariffRecord, ...]:
    """Driver function.

    Normalizes every partition of `ddf` as a delayed task and concatenates
    the results in partition order.

    Returns:
        Tuple of records, one per source row.
    """
    delayed_parts = ddf.to_delayed()
    tasks = [delayed(_normalize_partition)(part, code_mode, columns) for part in delayed_parts]

    results = compute(*tasks)

    records = tuple(r for part in results for r in part)
    undated = sum(1 for r in records if r.effective_date is None)

    log.info(
        "Normalized %d rows from %d partitions (code_mode=%s, undated=%d)",
        len(records),
        len(tasks),
        code_mode,
        undated,
    )
    return records
