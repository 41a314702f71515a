"""Filter engine and option lists.

`filter_records` derives a filtered view from a base record set without
touching it. `available_codes` and `available_exporters` build the option
lists offered for an importer.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from tariff_dashboard.models import WORLD, FilterSpec, TariffRecord


def matches(record: TariffRecord, spec: FilterSpec) -> bool:
    """Return True when `record` passes every predicate of `spec`.

    A record without an effective date fails any date bound.
    """
    if spec.importer != WORLD and record.importer != spec.importer:
        return False
    if spec.classification_code and record.classification_code != spec.classification_code:
        return False
    if spec.exporters and record.exporter not in spec.exporters:
        return False

    if spec.date_from is None and spec.date_to is None:
        return True

    day = record.day
    if day is None:
        return False
    if spec.date_from is not None and day < spec.date_from:
        return False
    if spec.date_to is not None and day > spec.date_to:
        return False
    return True


def filter_records(records: Iterable[TariffRecord], spec: FilterSpec) -> list[TariffRecord]:
    """Return the records matching `spec`, in input order.

    An empty list is a valid result; it never signals an error.
    """
    return [r for r in records if matches(r, spec)]


def _for_importer(records: Iterable[TariffRecord], importer: str) -> Iterable[TariffRecord]:
    if not importer or importer == WORLD:
        return records
    return (r for r in records if r.importer == importer)


def available_codes(records: Sequence[TariffRecord], importer: str = WORLD) -> list[str]:
    """Sorted distinct classification codes seen for `importer`."""
    return sorted({r.classification_code for r in _for_importer(records, importer) if r.classification_code})


def available_exporters(records: Sequence[TariffRecord], importer: str = WORLD) -> list[str]:
    """Sorted distinct exporters seen for `importer`."""
    return sorted({r.exporter for r in _for_importer(records, importer) if r.exporter})


def available_importers(records: Sequence[TariffRecord]) -> list[str]:
    """`World` followed by the sorted distinct importers."""
    return [WORLD] + sorted({r.importer for r in records if r.importer and r.importer != WORLD})
