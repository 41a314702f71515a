"""Load tariff CSV datasets and reference lists.

Tariff datasets are read with Dask (all columns as text, so that the row
normalizer decides how to coerce each cell) and normalized partition-wise.
Reference lists are small and read eagerly with pandas.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import pandas as pd
import dask.dataframe as dd

from tariff_dashboard.classifications import Classification
from tariff_dashboard.clean.parsing import clean_text
from tariff_dashboard.clean.transform import normalize_frame
from tariff_dashboard.config import DEFAULT_COLUMNS, ColumnMap
from tariff_dashboard.models import TariffRecord

log = logging.getLogger(__name__)

BLOCKSIZE = "64MB"


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise FileNotFoundError(f"Dataset not found: {path}")


def read_csv_ddf(path: Path, blocksize: str | int | None = BLOCKSIZE) -> Any:
    """Read a CSV file into a Dask DataFrame with every column as text.

    Args:
        path: CSV file with a header row.
        blocksize: Partition size passed to `dask.dataframe.read_csv`.

    Raises:
        FileNotFoundError: if `path` does not exist.
    """
    _require_file(path)
    return dd.read_csv(
        str(path),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        blocksize=blocksize,
    )


def load_tariff_dataset(
    path: Path,
    classification: Classification,
    columns: ColumnMap = DEFAULT_COLUMNS,
    scale: float | None = None,
) -> tuple[TariffRecord, ...]:
    """Load and normalize one tariff dataset.

    Args:
        path: CSV file of tariff rows.
        classification: Profile giving the code column and code mode.
        columns: Base column mapping.
        scale: Optional trade value multiplier overriding `columns`.

    Returns:
        Tuple of normalized records in file order.
    """
    log.info("Loading %s dataset from %s", classification.name, path)
    ddf = read_csv_ddf(path)
    records = normalize_frame(
        ddf,
        code_mode=classification.code_mode,
        columns=classification.columns(columns, scale),
    )
    log.info("Loaded %d %s records", len(records), classification.name)
    return records


def load_reference_list(
    path: Path,
    column: str,
    normalizer: Callable[[Any], str] = clean_text,
) -> list[str]:
    """Return the sorted distinct non-empty values of one column.

    A file without `column` yields an empty list and a warning.
    """
    _require_file(path)
    pdf = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    if column not in pdf.columns:
        log.warning("Column %r not found in %s. Returning empty list.", column, path)
        return []

    values = {normalizer(v) for v in pdf[column].tolist()}
    values.discard("")
    return sorted(values)
