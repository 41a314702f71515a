"""Session context holding the loaded datasets.

A `TariffSession` owns the immutable record tuples for each loaded
classification plus the reference lists used for option menus. Views are
derived per filter interaction via `apply`; the base data is never changed,
so any number of views can be built over one session.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from tariff_dashboard.aggregate.actions import summarize_actions
from tariff_dashboard.aggregate.filters import (
    available_codes,
    available_exporters,
    available_importers,
    filter_records,
)
from tariff_dashboard.aggregate.series import build_series, exporter_key
from tariff_dashboard.aggregate.summary import summarize
from tariff_dashboard.classifications import (
    CLASSIFICATIONS,
    Classification,
    UnknownClassificationError,
    chart_title,
    get_classification,
)
from tariff_dashboard.clean.parsing import clean_text, normalize_code
from tariff_dashboard.config import Settings
from tariff_dashboard.ingest.load_csv import load_reference_list, load_tariff_dataset
from tariff_dashboard.models import WORLD, DashboardView, FilterSpec, TariffRecord

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TariffSession:
    """Loaded datasets keyed by classification name.

    Attributes:
        datasets: Normalized records per classification.
        exporters: Reference list of exporter names.
        codes: Reference code list per classification.
    """
    datasets: Mapping[str, tuple[TariffRecord, ...]]
    exporters: tuple[str, ...] = ()
    codes: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "datasets", MappingProxyType(dict(self.datasets)))
        object.__setattr__(self, "codes", MappingProxyType(dict(self.codes)))

    @property
    def classifications(self) -> list[str]:
        return [name for name in CLASSIFICATIONS if name in self.datasets]

    def records(self, classification: str) -> tuple[TariffRecord, ...]:
        """Return the base records of a loaded classification.

        Raises:
            UnknownClassificationError: if the classification is unknown or
                was not loaded.
        """
        profile = get_classification(classification)
        try:
            return self.datasets[profile.name]
        except KeyError:
            raise UnknownClassificationError(
                f"Classification {profile.name!r} is not loaded"
            ) from None

    def importers(self, classification: str) -> list[str]:
        return available_importers(self.records(classification))

    def codes_for(self, classification: str, importer: str = WORLD) -> list[str]:
        """Codes present for the importer, limited to the reference list if one was loaded."""
        profile = get_classification(classification)
        options = available_codes(self.records(profile.name), importer)
        return _known(options, self.codes.get(profile.name, ()))

    def exporters_for(self, classification: str, importer: str = WORLD) -> list[str]:
        """Exporters present for the importer, limited to the reference list if one was loaded."""
        options = available_exporters(self.records(classification), importer)
        return _known(options, self.exporters)

    def apply(self, classification: str, spec: FilterSpec) -> DashboardView:
        """Filter one dataset and build the chart, table and overview for it."""
        profile = get_classification(classification)
        if spec.classification_code:
            code = normalize_code(spec.classification_code, profile.code_mode)
            spec = spec.model_copy(update={"classification_code": code or spec.classification_code})
        filtered = filter_records(self.records(profile.name), spec)

        series = build_series(filtered, series_key=None if spec.world_mode else exporter_key)
        summary = summarize(filtered, fixed_shares=profile.fixed_shares)

        log.info(
            "Applied filters classification=%s importer=%s code=%s exporters=%d -> %d records",
            profile.name,
            spec.importer,
            spec.classification_code or "All",
            len(spec.exporters),
            len(filtered),
        )

        return DashboardView(
            classification=profile.name,
            spec=spec,
            title=chart_title(profile, spec.classification_code),
            record_count=len(filtered),
            series=series,
            summary=summary,
            actions=summarize_actions(filtered, profile, spec),
        )


def _known(options: list[str], reference: Iterable[str]) -> list[str]:
    known = set(reference)
    if not known:
        return options
    return [value for value in options if value in known]


def _tariff_file(settings: Settings, profile: Classification) -> str:
    return settings.isic_tariff_file if profile.name == "isic" else settings.hs6_tariff_file


def _codes_file(settings: Settings, profile: Classification) -> str:
    return settings.isic_codes_file if profile.name == "isic" else settings.hs6_codes_file


def _optional_list(
    path: Path,
    column: str,
    normalizer: Callable[[Any], str] = clean_text,
) -> tuple[str, ...]:
    if not path.is_file():
        log.warning("Reference list %s not found. Option menus list every value in the dataset.", path)
        return ()
    return tuple(load_reference_list(path, column, normalizer))


def load_session(
    settings: Settings,
    classifications: Iterable[str] = tuple(CLASSIFICATIONS),
) -> TariffSession:
    """Load the requested datasets and reference lists into a session.

    This is the one-shot bulk load that must complete before the first
    filter is applied.

    Raises:
        FileNotFoundError: if a requested tariff dataset is missing.
        UnknownClassificationError: for an unregistered classification name.
    """
    profiles = [get_classification(name) for name in classifications]

    datasets: dict[str, tuple[TariffRecord, ...]] = {}
    codes: dict[str, tuple[str, ...]] = {}
    for profile in profiles:
        datasets[profile.name] = load_tariff_dataset(
            settings.path(_tariff_file(settings, profile)),
            profile,
            scale=settings.trade_value_scale,
        )
        codes[profile.name] = _optional_list(
            settings.path(_codes_file(settings, profile)),
            profile.reference_column,
            lambda v, mode=profile.code_mode: normalize_code(v, mode),
        )

    exporters = _optional_list(settings.path(settings.exporters_file), "exporter")

    log.info(
        "Session ready: %s",
        ", ".join(f"{name}={len(recs)}" for name, recs in datasets.items()),
    )
    return TariffSession(datasets=datasets, exporters=exporters, codes=codes)
