"""Classification profiles for the tariff datasets.

Each dataset is keyed by one product classification. The profile records
which source column holds the code, how the code is normalized, and
whether the summary shares are computed or fixed at 100%.
"""
from __future__ import annotations

from dataclasses import dataclass, replace

from tariff_dashboard.clean.parsing import CodeMode
from tariff_dashboard.config import DEFAULT_COLUMNS, ColumnMap


class UnknownClassificationError(ValueError):
    """Raised when a classification name is not registered or not loaded."""


@dataclass(frozen=True)
class Classification:
    """Profile for one classification dataset.

    Attributes:
        name: Registry key (`isic`, `hs6`).
        code_column: Source column with the classification code.
        reference_column: Column of the reference code list file.
        code_mode: Code normalization mode.
        fixed_shares: Summary share columns are a literal 100% rather than
            computed (tariff-line datasets carry no line-level shares).
        label: Chart title prefix.
        short_label: Prefix used in the action overview.
    """
    name: str
    code_column: str
    reference_column: str
    code_mode: CodeMode
    fixed_shares: bool
    label: str
    short_label: str

    def columns(self, base: ColumnMap = DEFAULT_COLUMNS, scale: float | None = None) -> ColumnMap:
        """Return `base` with this profile's code column (and optional scale)."""
        if scale is None:
            return replace(base, code=self.code_column)
        return replace(base, code=self.code_column, trade_value_scale=scale)


ISIC = Classification(
    name="isic",
    code_column="isic4_2",
    reference_column="isic4_2",
    code_mode="prefix2",
    fixed_shares=False,
    label="ISIC4 2 Digit Tariff Line",
    short_label="ISIC",
)

HS6 = Classification(
    name="hs6",
    code_column="hs6",
    reference_column="hs6code",
    code_mode="full",
    fixed_shares=True,
    label="HS6 Tariff Line",
    short_label="HS6",
)

CLASSIFICATIONS: dict[str, Classification] = {c.name: c for c in (ISIC, HS6)}


def get_classification(name: str) -> Classification:
    """Look up a classification profile by name (case-insensitive)."""
    try:
        return CLASSIFICATIONS[name.strip().lower()]
    except KeyError:
        raise UnknownClassificationError(
            f"Unknown classification {name!r}; expected one of {sorted(CLASSIFICATIONS)}"
        ) from None


def chart_title(classification: Classification, code: str | None = None) -> str:
    """Return the chart title, e.g. "HS6 Tariff Line 010121"."""
    if code:
        return f"{classification.label} {code}"
    return classification.label
