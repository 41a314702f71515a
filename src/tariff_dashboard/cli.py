"""Command-line interface over the tariff analytics core.

Provides subcommands: `series`, `summary`, `actions` and `options`. Each
command is implemented as a `cmd_*` function that accepts an argparse
namespace and a loaded `TariffSession`.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Sequence

import pandas as pd

from tariff_dashboard.aggregate.summary import summary_table
from tariff_dashboard.classifications import (
    CLASSIFICATIONS,
    UnknownClassificationError,
    get_classification,
)
from tariff_dashboard.clean.parsing import parse_date
from tariff_dashboard.config import get_settings
from tariff_dashboard.logging_config import configure_logging
from tariff_dashboard.models import WORLD, DashboardView, FilterSpec
from tariff_dashboard.session import TariffSession, load_session

log = logging.getLogger(__name__)


# --------------------------------------------------
# Helpers
# --------------------------------------------------
def _date_arg(value: str) -> date:
    """argparse `type` for date options; accepts the same formats as the data."""
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}")
    return parsed.date()


def spec_from_args(args: argparse.Namespace) -> FilterSpec:
    """Build a `FilterSpec` from the shared filter options."""
    return FilterSpec(
        importer=args.importer,
        classification_code=args.code,
        exporters=args.exporter or [],
        date_from=args.date_from,
        date_to=args.date_to,
    )


def _view(args: argparse.Namespace, session: TariffSession) -> DashboardView:
    return session.apply(args.classification, spec_from_args(args))


# --------------------------------------------------
# Commands
# --------------------------------------------------
def cmd_series(args: argparse.Namespace, session: TariffSession) -> None:
    """Print the chart series: one row per date label, one column per series."""
    view = _view(args, session)
    if args.json:
        print(view.series.model_dump_json(indent=2))
        return
    if view.series.is_empty:
        print("No Data")
        return

    frame = pd.DataFrame(view.series.series, index=view.series.labels)
    frame.index.name = "Date"
    print(view.title)
    print(frame.to_string(na_rep="-"))


def cmd_summary(args: argparse.Namespace, session: TariffSession) -> None:
    """Print the (exporter, date) summary table."""
    view = _view(args, session)
    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in view.summary], indent=2))
        return
    if not view.summary:
        print("No Data")
        return

    fixed = get_classification(view.classification).fixed_shares
    print(summary_table(view.summary, fixed_shares=fixed).to_string(index=False))


def cmd_actions(args: argparse.Namespace, session: TariffSession) -> None:
    """Print the executive-action overview for the selection."""
    actions = _view(args, session).actions
    if actions is None:
        print("No EO-related data.")
        return

    print(f"Importer: {actions.importer}")
    print(f"Exporter: {actions.exporter_label}")
    print(f"Classification: {actions.classification_label}")
    print(f"Date Range: {actions.date_range_label}")
    print(f"EO-related actions: {actions.affected_record_count}")


def cmd_options(args: argparse.Namespace, session: TariffSession) -> None:
    """Print the importers, codes and exporters available for a selection."""
    payload = {
        "importers": session.importers(args.classification),
        "codes": session.codes_for(args.classification, args.importer),
        "exporters": session.exporters_for(args.classification, args.importer),
    }
    print(json.dumps(payload, indent=2))


COMMANDS = {
    "series": cmd_series,
    "summary": cmd_summary,
    "actions": cmd_actions,
    "options": cmd_options,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--classification", choices=sorted(CLASSIFICATIONS), default="hs6")
    p.add_argument("--importer", default=WORLD)
    p.add_argument("--code", default=None)
    p.add_argument("--exporter", action="append", default=None,
                   help="Repeat for several exporters; omit for World.")
    p.add_argument("--date-from", type=_date_arg, default=None)
    p.add_argument("--date-to", type=_date_arg, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The returned parser has subcommands `series`, `summary`, `actions` and
    `options`, all sharing the filter options.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="tariff-dashboard")
    p.add_argument("--data-dir", type=Path, default=None,
                   help="Override TARIFF_DATA_DIR.")
    p.add_argument("--log-file", type=Path, default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    for name in ("series", "summary"):
        sp = sub.add_parser(name)
        _add_filter_args(sp)
        sp.add_argument("--json", action="store_true")

    _add_filter_args(sub.add_parser("actions"))
    _add_filter_args(sub.add_parser("options"))

    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging, load data and dispatch."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.data_dir is not None:
        settings = replace(settings, data_dir=args.data_dir)
    # keep stdout clean for --json output
    configure_logging(args.log_file, level=settings.level, stream=sys.stderr)

    command = COMMANDS.get(args.cmd)
    if command is None:
        raise SystemExit(2)

    try:
        session = load_session(settings, classifications=[args.classification])
    except FileNotFoundError as exc:
        log.error("%s", exc)
        raise SystemExit(1) from exc
    except UnknownClassificationError as exc:
        log.error("%s", exc)
        raise SystemExit(2) from exc

    try:
        command(args, session)
    except UnknownClassificationError as exc:
        log.error("%s", exc)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
