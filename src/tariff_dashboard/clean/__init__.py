"""Row normalization utilities.

Provides tolerant parsers for dates, numbers and classification codes, and
the row/partition transforms that turn raw CSV rows into `TariffRecord`s.
"""
