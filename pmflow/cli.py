"""
Command line interface for pmflow.

This module exposes subcommands to run each stage of the pipeline:
downloading the source page into the local cache, normalizing the
table into a records CSV, simulating a comparable dataset and
rendering the table and timeline report.  The CLI is intentionally
lightweight and delegates most of the work to functions in the
`collect`, `normalize`, `simulate` and `report` packages.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from .collect.fetcher import fetch_page
from .config import Settings, load_settings
from .exceptions import PmflowError
from .normalize.write_csv import read_records_csv, write_records_csv
from .pipeline import run_pipeline
from .report.table import format_table
from .report.timeline import plot_timeline
from .simulate.simulator import simulate_records

logger = logging.getLogger("pmflow.cli")


def _settings(args: argparse.Namespace) -> Settings:
    return load_settings(args.config)


def cmd_fetch(args: argparse.Namespace) -> None:
    """Download the source page into the cache file."""
    settings = _settings(args)
    path = fetch_page(
        settings.url, settings.cache_path, timeout=settings.timeout, refresh=args.refresh
    )
    logger.info("Page cached at %s", path)


def cmd_normalize(args: argparse.Namespace) -> None:
    """Parse the cached table into a records CSV."""
    settings = _settings(args)
    result = run_pipeline(settings, refresh=args.refresh)
    out = args.out or settings.csv_path
    write_records_csv(result.records, out)
    logger.info("Normalized %d records into %s", len(result.records), out)


def cmd_simulate(args: argparse.Namespace) -> None:
    """Write a simulated records CSV."""
    settings = _settings(args)
    records = simulate_records(
        args.n if args.n is not None else settings.simulate_n,
        seed=args.seed if args.seed is not None else settings.simulate_seed,
        born_range=settings.born_range,
        lifespan_range=settings.lifespan_range,
        min_prop=settings.simulate_min_prop,
    )
    out = args.out or settings.simulate_out
    write_records_csv(records, out)
    logger.info("Simulated %d records into %s", len(records), out)


def cmd_report(args: argparse.Namespace) -> None:
    """Print the table and draw the timeline from a records CSV."""
    settings = _settings(args)
    records = read_records_csv(args.records or settings.csv_path)
    print(format_table(records, limit=args.limit))
    plot_timeline(
        records,
        args.chart or settings.chart_path,
        current_year=settings.resolved_current_year(),
        title=settings.title,
    )


def cmd_run(args: argparse.Namespace) -> None:
    """Run fetch, normalize and report in one go."""
    settings = _settings(args)
    result = run_pipeline(settings, refresh=args.refresh)
    write_records_csv(result.records, settings.csv_path)
    print(format_table(result.records))
    plot_timeline(
        result.records,
        settings.chart_path,
        current_year=settings.resolved_current_year(),
        title=settings.title,
    )
    if result.issues:
        print(f"\n{len(result.issues)} malformed rows dropped:")
        for issue in result.issues:
            print(f"   {issue}")
    for conflict in result.conflicts:
        print(f"Warning: {conflict}")


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="pmflow", description="Prime minister lifespan pipeline")
    parser.add_argument("--config", help="YAML file overriding the packaged defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Fetch
    fetch_cmd = subparsers.add_parser("fetch", help="Download the source page into the cache")
    fetch_cmd.add_argument("--refresh", action="store_true", help="Download even if cached")
    fetch_cmd.set_defaults(func=cmd_fetch)

    # Normalize
    norm_cmd = subparsers.add_parser("normalize", help="Parse the table into a records CSV")
    norm_cmd.add_argument("--refresh", action="store_true", help="Download even if cached")
    norm_cmd.add_argument("--out", help="Output CSV path")
    norm_cmd.set_defaults(func=cmd_normalize)

    # Simulate
    sim_cmd = subparsers.add_parser("simulate", help="Generate a simulated records CSV")
    sim_cmd.add_argument("-n", type=int, help="Number of records")
    sim_cmd.add_argument("--seed", type=int, help="Random seed")
    sim_cmd.add_argument("--out", help="Output CSV path")
    sim_cmd.set_defaults(func=cmd_simulate)

    # Report
    report_cmd = subparsers.add_parser("report", help="Print the table and draw the timeline")
    report_cmd.add_argument("--records", help="Records CSV to report on")
    report_cmd.add_argument("--chart", help="Output image path")
    report_cmd.add_argument("--limit", type=int, help="Number of rows to print")
    report_cmd.set_defaults(func=cmd_report)

    # Run
    run_cmd = subparsers.add_parser("run", help="Fetch, normalize and report")
    run_cmd.add_argument("--refresh", action="store_true", help="Download even if cached")
    run_cmd.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )
    try:
        args.func(args)
    except PmflowError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
