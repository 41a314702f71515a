"""tariff_dashboard package.

Contains modules for loading tariff and trade CSV datasets, normalizing raw
rows into typed records, filtering them by importer, exporter,
classification code and date range, and aggregating the result into chart
series and weighted summary tables for a Streamlit dashboard.

Architecture:
- Raw rows → normalized `TariffRecord` tuples held by a `TariffSession`
- Dask is used for the partitioned load and normalization
- Pydantic models describe records, filters and aggregation outputs
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
