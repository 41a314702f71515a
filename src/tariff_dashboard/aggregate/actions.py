"""Executive-action overview for the current selection."""
from __future__ import annotations

from typing import Sequence

from tariff_dashboard.classifications import Classification
from tariff_dashboard.clean.parsing import format_date_label
from tariff_dashboard.models import WORLD, ActionSummary, FilterSpec, TariffRecord

ALL_DATES = "All Dates"
OPEN_BOUND = "…"


def exporter_label(exporters: Sequence[str] | frozenset[str]) -> str:
    if not exporters:
        return WORLD
    if len(exporters) == 1:
        return next(iter(exporters))
    return f"{len(exporters)} exporters"


def date_range_label(spec: FilterSpec) -> str:
    if spec.date_from is None and spec.date_to is None:
        return ALL_DATES
    start = format_date_label(spec.date_from) if spec.date_from else OPEN_BOUND
    end = format_date_label(spec.date_to) if spec.date_to else OPEN_BOUND
    return f"{start} → {end}"


def summarize_actions(
    records: Sequence[TariffRecord],
    classification: Classification,
    spec: FilterSpec,
) -> ActionSummary | None:
    """Describe the selection and count records affected by a measure.

    Returns:
        `ActionSummary`, or None when there are no records to describe.
    """
    if not records:
        return None

    return ActionSummary(
        importer=spec.importer,
        exporter_label=exporter_label(spec.exporters),
        classification_label=f"{classification.short_label} {spec.classification_code or 'All'}",
        date_range_label=date_range_label(spec),
        affected_record_count=sum(1 for r in records if r.affected_trade_value_usd > 0),
    )
