from __future__ import annotations

import pandas as pd
import streamlit as st

from tariff_dashboard.aggregate.summary import summary_table
from tariff_dashboard.charts import tariff_chart
from tariff_dashboard.classifications import CLASSIFICATIONS, get_classification
from tariff_dashboard.config import get_settings
from tariff_dashboard.logging_config import configure_logging
from tariff_dashboard.models import WORLD, FilterSpec
from tariff_dashboard.session import TariffSession, load_session

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Tariff & Trade Dashboard", layout="wide")
st.title("📊 Tariff & Trade Dashboard")


# =====================================================
# Data load (once per process)
# =====================================================
@st.cache_resource(show_spinner="Loading Data...")
def get_session() -> TariffSession:
    """Load every configured dataset into a shared read-only session."""
    settings = get_settings()
    configure_logging(level=settings.level)
    return load_session(settings)


try:
    session = get_session()
except (FileNotFoundError, RuntimeError) as exc:  # pragma: no cover - runtime failure handling
    st.error(f"Unable to load tariff data: {exc}")
    st.stop()


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
    )


# =====================================================
# Filters
# =====================================================
with st.sidebar:
    st.header("Filters")
    names = session.classifications or sorted(CLASSIFICATIONS)
    cls = st.selectbox(
        "Classification",
        names,
        index=names.index("hs6") if "hs6" in names else 0,
        format_func=lambda n: get_classification(n).label,
    )
    importer = st.selectbox("Importer", session.importers(cls), index=0)
    code = st.selectbox("Code", ["All"] + session.codes_for(cls, importer))
    exporters = st.multiselect(
        "Exporters (empty = World, all exporters)",
        session.exporters_for(cls, importer),
    )
    date_from = st.date_input("Date from", value=None)
    date_to = st.date_input("Date to", value=None)

spec = FilterSpec(
    importer=importer or WORLD,
    classification_code=None if code == "All" else code,
    exporters=exporters,
    date_from=date_from,
    date_to=date_to,
)
view = session.apply(cls, spec)

# =====================================================
# SECTION 1 — TARIFF TREND
# =====================================================
st.header(view.title)

if view.series.is_empty:
    st.warning("No Data")
else:
    chart = tariff_chart(view.series, world_mode=spec.world_mode)
    st.altair_chart(chart, width="stretch")

st.divider()

# =====================================================
# SECTION 2 — SUMMARY
# =====================================================
st.header("📋 Summary")

if not view.summary:
    st.info("No summary rows for this selection.")
else:
    table = summary_table(view.summary, fixed_shares=get_classification(cls).fixed_shares)
    st.dataframe(center_dataframe(table), width="stretch")

st.divider()

# =====================================================
# SECTION 3 — EXECUTIVE ACTIONS
# =====================================================
st.header("📌 Executive Actions")

if view.actions is None:
    st.info("No EO-related data.")
else:
    a = view.actions
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Importer", a.importer)
    c2.metric("Exporter", a.exporter_label)
    c3.metric("Classification", a.classification_label)
    c4.metric("Date Range", a.date_range_label)
    c5.metric("EO-related actions", a.affected_record_count)

# =====================================================
# Footer
# =====================================================
st.caption("Tariff & trade data • Dask • Pydantic • Streamlit • Altair")
