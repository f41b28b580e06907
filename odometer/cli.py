#!/usr/bin/env python3
"""
CLI entry point for odometer.

  odometer <directory> [--format csv|chart] [--preset daily|hourly]
                       [--now ISO8601] [--log-json PATH]
  odometer --version

Reads every *gpx file in <directory> and writes the trailing-window mileage
report to standard output.
"""

import sys
from argparse import ArgumentParser, Namespace
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version as _get_version
from pathlib import Path
from typing import NoReturn, TextIO

from odometer.analysis.buckets import MileageCollector
from odometer.analysis.config import PRESETS, MileageConfig, OutputFormat, default_now
from odometer.analysis.window import aggregate_mileage
from odometer.export.sinks import get_sink
from odometer.parsers.gpx import is_track_file
from odometer.utils.log import add_json_file_handler, get_logger, remove_handler
from odometer.utils.timeutils import parse_instant, round_instant
from odometer.utils.validate import MileageRow

logger = get_logger(__name__)


class UsageError(Exception):
    """
    Raised instead of exiting when the command line cannot be parsed.
    """


class _ArgumentParser(ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def list_track_files(directory: str | Path) -> list[Path]:
    """
    Track files directly inside `directory`, sorted by name.

    Raises
    ------
    OSError
        If the directory cannot be listed.
    """
    return sorted(p for p in Path(directory).iterdir() if is_track_file(p))


def build_report(directory: str | Path, cfg: MileageConfig, now: datetime) -> list[MileageRow]:
    """
    Collect every track file in `directory` and return the windowed mileage rows.

    Parameters
    ----------
    directory
        Directory holding the track files.
    cfg
        Bucketing and windowing parameters.
    now
        Exclusive end of the report, aligned to `cfg.granularity`.
    """
    paths = list_track_files(directory)
    logger.info("Found %d track files in %s", len(paths), directory)

    collector = MileageCollector(cfg, now)
    series = collector.collect_files(paths)
    aggregate = aggregate_mileage(series, cfg)
    return [MileageRow(time=t, miles=m) for t, m in aggregate.items()]


def report(
    directory: str | Path,
    fmt: OutputFormat,
    cfg: MileageConfig,
    now: datetime,
    stream: TextIO | None = None,
) -> None:
    """
    Build the report and render it to `stream` (default: the current stdout)
    in the requested format.
    """
    logger.info("Report: dir=%s, format=%s, now=%s", directory, fmt.value, now.isoformat())
    rows = build_report(directory, cfg, now)
    get_sink(fmt).write(rows, stream if stream is not None else sys.stdout)


def version() -> None:
    """
    Print the installed odometer package version.
    """
    try:
        ver = _get_version("odometer")
    except PackageNotFoundError:
        ver = "unknown"
    print(f"odometer {ver}")


def build_parser() -> ArgumentParser:
    parser = _ArgumentParser(prog="odometer", description="Rolling mileage from GPX tracks.")
    parser.add_argument("directory", nargs="?", help="Directory of .gpx track files.")
    parser.add_argument(
        "--format", dest="fmt", default=OutputFormat.CHART.value,
        choices=[f.value for f in OutputFormat], help="Output format (default: chart).",
    )
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default="daily",
        help="Bucket granularity preset (default: daily).",
    )
    parser.add_argument(
        "--now", type=parse_instant,
        help="ISO8601 end of the report (default: tomorrow, rounded to the granularity).",
    )
    parser.add_argument("--log-json", type=str, help="Also append JSON logs to this file.")
    parser.add_argument("--version", action="store_true", help="Show odometer version and exit.")
    return parser


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command-line arguments and return the populated namespace.

    Raises
    ------
    UsageError
        On unknown options, bad values, or a wrong number of positionals.
    """
    args = build_parser().parse_args(argv)
    if args.directory is None and not args.version:
        raise UsageError("a directory is required")
    return args


def main(argv: list[str] | None = None) -> None:
    """
    Entry point: parse arguments and write the report to stdout.

    Usage and directory errors are printed and end the run normally.
    """
    try:
        args = parse_args(argv)
    except UsageError as exc:
        logger.debug("Usage error: %s", exc)
        print(build_parser().format_usage(), end="")
        return

    if args.version:
        version()
        return

    cfg = PRESETS[args.preset]()
    if args.now is not None:
        now = round_instant(args.now, cfg.granularity)
    else:
        now = default_now(cfg)

    json_handler = None
    try:
        if args.log_json:
            json_handler = add_json_file_handler(args.log_json)
        report(args.directory, OutputFormat(args.fmt), cfg, now)
    except OSError as exc:
        print(exc)
    finally:
        if json_handler is not None:
            remove_handler(json_handler)


if __name__ == "__main__":
    main()
