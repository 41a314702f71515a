"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads dataset locations from the environment, plus the `ColumnMap` that
names the source CSV columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

# Source trade values are reported in thousands of USD
DEFAULT_TRADE_VALUE_SCALE = 1000.0


@dataclass(frozen=True)
class ColumnMap:
    """Names of the source columns mapped onto `TariffRecord` fields.

    Columns not listed here are carried through as record metadata.
    """
    importer: str = "importer"
    exporter: str = "exporter"
    date: str = "date_eff"
    code: str = "hs6"
    tariff_rate: str = "tariffs"
    trade_value: str = "importsvaluein1000usd"
    affected_trade_value: str = "affected_trade_value"
    affected_trade_share: str = "affected_trade_share"
    affected_line_share: str = "affected_hs6tariff_line_share"
    trade_value_scale: float = DEFAULT_TRADE_VALUE_SCALE

    def mapped(self) -> frozenset[str]:
        """Return the set of column names consumed by typed fields."""
        return frozenset(
            {
                self.importer,
                self.exporter,
                self.date,
                self.code,
                self.tariff_rate,
                self.trade_value,
                self.affected_trade_value,
                self.affected_trade_share,
                self.affected_line_share,
            }
        )


DEFAULT_COLUMNS = ColumnMap()


@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        data_dir: Directory holding the CSV datasets.
        exporters_file: Reference list of exporter names.
        isic_codes_file: Reference list of ISIC4 codes.
        hs6_codes_file: Reference list of HS6 codes.
        isic_tariff_file: Tariff dataset keyed by 2-digit ISIC4 code.
        hs6_tariff_file: Tariff dataset keyed by HS6 tariff line.
        trade_value_scale: Multiplier that converts source trade values to USD.
        log_level: Logging level name.
    """
    data_dir: Path
    exporters_file: str
    isic_codes_file: str
    hs6_codes_file: str
    isic_tariff_file: str
    hs6_tariff_file: str
    trade_value_scale: float
    log_level: str

    def path(self, name: str) -> Path:
        """Resolve a dataset file name against `data_dir`."""
        return self.data_dir / name

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level.upper(), logging.INFO)


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `TARIFF_TRADE_VALUE_SCALE` is not a positive number.
    """
    data_dir = Path(os.getenv("TARIFF_DATA_DIR", "data"))
    raw_scale = os.getenv("TARIFF_TRADE_VALUE_SCALE", str(DEFAULT_TRADE_VALUE_SCALE)).strip()

    try:
        trade_value_scale = float(raw_scale)
    except ValueError:
        trade_value_scale = 0.0

    if trade_value_scale <= 0:
        raise RuntimeError(
            "TARIFF_TRADE_VALUE_SCALE must be a positive number "
            f"(got {raw_scale!r}; use 1000 for values reported in thousands)."
        )

    return Settings(
        data_dir=data_dir,
        exporters_file=os.getenv("TARIFF_EXPORTERS_FILE", "exporters.csv"),
        isic_codes_file=os.getenv("TARIFF_ISIC_CODES_FILE", "isic4_2_product_name.csv"),
        hs6_codes_file=os.getenv("TARIFF_HS6_CODES_FILE", "hs6code.csv"),
        isic_tariff_file=os.getenv("TARIFF_ISIC_FILE", "isic2tariff.csv"),
        hs6_tariff_file=os.getenv("TARIFF_HS6_FILE", "hs6tariff.csv"),
        trade_value_scale=trade_value_scale,
        log_level=os.getenv("TARIFF_LOG_LEVEL", "INFO"),
    )
