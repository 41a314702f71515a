"""Altair chart for the tariff series."""
from __future__ import annotations

from typing import Any, Dict

import altair as alt

from tariff_dashboard.models import SeriesResult

alt.data_transformers.disable_max_rows()

# null values break the line; they are never drawn as zero
GAP_MODE = "break-paths-show-domains"


def tariff_chart(series: SeriesResult, world_mode: bool = True, height: int = 360) -> alt.Chart:
    """Step chart of per-day average tariffs, one line per series.

    The legend is hidden in world mode, where there is a single series.
    """
    return (
        alt.Chart(series.to_frame())
        .mark_line(point=True, interpolate="step-after", invalid=GAP_MODE)
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("value:Q", title="Tariff (%)"),
            color=alt.Color("series:N", title="Exporter", legend=None if world_mode else alt.Legend()),
            tooltip=["label:N", "series:N", alt.Tooltip("value:Q", format=".2f")],
        )
        .properties(height=height)
    )


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()
