"""Filtering and aggregation helpers.

This package contains the routines that turn a normalized record set into
the outputs the dashboard renders: filtered views, time-bucketed chart
series, grouped weighted summaries and the executive-action overview.
"""
