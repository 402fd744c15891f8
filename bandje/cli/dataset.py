# =============================================================================
# bandje/cli/dataset.py - Dataset inspection CLI
# =============================================================================
#
# Works on the lineup dataset directly, without starting the API server.
# Uses the same loader, flattener, sampling and export services as the
# server, so its output matches what the endpoints return.
#
# Typical usage:
#   python -m bandje.cli summary                      # counts per festival
#   python -m bandje.cli sample --count 3             # 3 random performances
#   python -m bandje.cli sample --count 3 --seed 42   # reproducible sample
#   python -m bandje.cli export -o all_bands.json     # full export to a file
#
# The dataset path and the sampling bounds come from load_config() (the
# same config/config.yaml + environment layering the server uses).  The
# path can be overridden with --dataset, before or after the subcommand.
#
# stdout carries only command output; logging goes to stderr at WARNING.

# =============================================================================

"""Command-line tools for inspecting the lineup dataset.

Usage::

    python -m bandje.cli summary [--dataset PATH]
    python -m bandje.cli sample [--dataset PATH] [--count N] [--seed S] [--json]
    python -m bandje.cli export [--dataset PATH] [--output FILE]

Exits with status 1 when the dataset is missing or malformed.
"""

from __future__ import annotations

import argparse
import json
import random
import sys
from collections import Counter
from pathlib import Path
from typing import Any

from bandje.config.loader import load_config
from bandje.services.export_service import ExportService
from bandje.services.performance_store import PerformanceStore
from bandje.services.sampling_service import DEFAULT_MAX_COUNT, DEFAULT_MIN_COUNT, SamplingService
from bandje.utils.errors import ConfigurationError, StartupLoadError
from bandje.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _handle_summary(store: PerformanceStore) -> int:
    per_festival = Counter(record.festival for record in store)
    editions_seen = {(record.festival, record.year) for record in store}

    print(f"Performances: {len(store)}")
    print(f"Festivals:    {len(per_festival)}")
    for festival in store.festivals():
        editions = sorted(year for (name, year) in editions_seen if name == festival)
        span = f"{editions[0]}-{editions[-1]}" if editions else "-"
        print(f"  {festival:<24} {per_festival[festival]:>6} performances  ({len(editions)} editions, {span})")
    return 0


def _handle_sample(args: argparse.Namespace, store: PerformanceStore, config: dict[str, Any]) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    sampling = config.get("sampling", {})
    service = SamplingService(
        store,
        min_count=sampling.get("min_count", DEFAULT_MIN_COUNT),
        max_count=sampling.get("max_count", DEFAULT_MAX_COUNT),
        rng=rng,
    )
    selection = service.sample(args.count)
    if not selection:
        print("No performances found.", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([record.model_dump() for record in selection], indent=2, ensure_ascii=False))
    else:
        for record in selection:
            print(f"{record.name}  |  {record.festival} {record.year}")
    return 0


def _handle_export(args: argparse.Namespace, store: PerformanceStore) -> int:
    payload = ExportService(store).export_json()
    if args.output:
        Path(args.output).write_bytes(payload)
        print(f"Wrote {len(store)} performances to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(payload.decode("utf-8"))
        sys.stdout.write("\n")
    return 0


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def _configure_quiet_logging() -> None:
    """Send all structlog and stdlib logging to stderr at WARNING+ level.

    Called before the dataset is loaded so stdout contains only the command
    output (JSON export and ``sample --json`` must stay parseable).  The
    service modules' loggers resolve against the configuration at call time,
    so reconfiguring here also quiets loggers created at import.
    """
    configure_logging(log_level="WARNING", stream=sys.stderr)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

_DEFAULT_CONFIG_PATH = "config/config.yaml"
_DATASET_HELP = "Path to the lineup JSON file (default: DATASET_PATH, config.yaml or bands.json)"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bandje",
        description="Inspect the festival lineup dataset.",
    )
    parser.add_argument("--dataset", default=None, help=_DATASET_HELP)
    parser.add_argument(
        "--config",
        default=_DEFAULT_CONFIG_PATH,
        help=f"YAML config file (default: {_DEFAULT_CONFIG_PATH})",
    )

    # Shared by every subcommand so --dataset also works after it.
    # SUPPRESS keeps an omitted flag from overwriting the top-level value.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--dataset", default=argparse.SUPPRESS, help=_DATASET_HELP)

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("summary", parents=[common], help="Show performance counts per festival")

    sample = subparsers.add_parser("sample", parents=[common], help="Print random performances")
    sample.add_argument("--count", "-n", type=int, default=None, help="How many (clamped to the configured range)")
    sample.add_argument("--seed", type=int, default=None, help="Seed for a reproducible sample")
    sample.add_argument("--json", action="store_true", help="Print JSON instead of text")

    export = subparsers.add_parser("export", parents=[common], help="Write the full dataset as flat JSON")
    export.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse arguments, load the dataset, dispatch."""
    _configure_quiet_logging()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    config = load_config(args.config)
    dataset_path = args.dataset or config["dataset"]["path"]

    try:
        store = PerformanceStore.from_file(dataset_path)
    except StartupLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "summary":
            exit_code = _handle_summary(store)
        elif args.command == "sample":
            exit_code = _handle_sample(args, store, config)
        elif args.command == "export":
            exit_code = _handle_export(args, store)
        else:
            parser.print_help()
            exit_code = 1
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
