"""CSV loading helpers for tariff datasets and reference lists."""
