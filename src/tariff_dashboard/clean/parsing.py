"""Fail-soft parsers used by the row normalizer.

Every function in this module returns a safe default (``""``, ``None`` or
``0.0``) instead of raising, so one malformed cell never aborts a row and
one malformed row never aborts a dataset.
"""
from __future__ import annotations

import math
import re
import warnings
from datetime import date, datetime
from typing import Any, Literal

import pandas as pd

CodeMode = Literal["full", "prefix2"]

ISO_DATE_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")
US_DATE_RE = re.compile(r"^(\d{1,2})([/-])(\d{1,2})\2(\d{2}|\d{4})$")
NON_DIGIT_RE = re.compile(r"\D")

CODE_PREFIX_WIDTH = 2


def clean_text(value: Any) -> str:
    """Return `value` as trimmed text; missing or blank input gives ""."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # list-like cells have no scalar NA answer
        pass
    return str(value).strip()


def parse_number(value: Any) -> float:
    """Coerce a raw cell to float, returning 0.0 for anything unusable.

    Thousands separators and a trailing percent sign are tolerated. Missing,
    blank, non-numeric, NaN and infinite input all give 0.0.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = clean_text(value).replace(",", "")
        if text.endswith("%"):
            text = text[:-1].strip()
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


def _safe_datetime(year: int, month: int, day: int) -> datetime | None:
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def parse_date(value: Any) -> datetime | None:
    """Parse an effective date, returning None when it cannot be read.

    Formats are tried in order: ISO (`YYYY-MM-DD`, `YYYY/MM/DD`), US
    (`M/D/YY`, `M/D/YYYY`, dashes allowed, two-digit years are 20xx), then
    a generic pandas parse. Timezones are dropped; time of day is kept.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = clean_text(value)
    if not text:
        return None

    m = ISO_DATE_RE.match(text)
    if m:
        return _safe_datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = US_DATE_RE.match(text)
    if m:
        year = int(m.group(4))
        if len(m.group(4)) == 2:
            year += 2000
        return _safe_datetime(year, int(m.group(1)), int(m.group(3)))

    with warnings.catch_warnings():
        # pandas warns when it has to guess a format for a single string
        warnings.simplefilter("ignore", UserWarning)
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None

    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.to_pydatetime()


def normalize_code(value: Any, code_mode: CodeMode = "prefix2") -> str:
    """Normalize a classification code.

    In `full` mode the trimmed code is returned unchanged. In `prefix2` mode
    non-digits are stripped and the result is cut or left-zero-padded to two
    characters, e.g. "4100" -> "41", "5" -> "05", "ab12cd" -> "12".
    """
    text = clean_text(value)
    if code_mode == "full":
        return text

    digits = NON_DIGIT_RE.sub("", text)
    if not digits:
        return ""
    if len(digits) >= CODE_PREFIX_WIDTH:
        return digits[:CODE_PREFIX_WIDTH]
    return digits.rjust(CODE_PREFIX_WIDTH, "0")


def normalize_fraction(value: float) -> float:
    """Return a share as a 0-1 fraction.

    Shares arrive either as fractions or as percentages in the same field;
    anything above 1 is taken to be a percentage.
    """
    return value / 100 if value > 1 else value


def format_date_label(day: date) -> str:
    """Render a day as an en-US `M/D/YYYY` label without zero padding."""
    return f"{day.month}/{day.day}/{day.year}"
