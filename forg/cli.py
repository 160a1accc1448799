"""
Command-line interface for forg.

Handles argument parsing, logging setup and orchestrates operations.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import Config, DEFAULT_CONFIG, DEFAULT_CONFIG_FILENAME
from .console import ConsoleReporter
from .errors import ForgError
from .operations import clean_empty_dirs, collect_stats, organize_by_date, organize_by_type
from .utils import validate_date_format

LOGGER_NAME = "forg"


def _resolve(path: str) -> Path:
    return Path(path).expanduser().resolve()


def configure_logging(verbose: bool = False, stream=None) -> logging.Logger:
    """
    Set up the package logger: WARNING by default, DEBUG with --verbose.

    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def create_parser(config: Config = DEFAULT_CONFIG) -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Args:
        config: Configuration to use for choices and help text

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="forg",
        description="A CLI tool to organize files by type, date, or custom rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  forg by-type --source ~/Downloads --dry-run
  forg by-date --source ~/Pictures --format year
  forg clean --directory ~/Downloads
  forg stats --directory ~/Downloads
  forg config --output forg-config.json

Use --dry-run to preview changes before applying.
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Load classification table, ignore patterns and date formats from a JSON file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every decision to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    by_type = subparsers.add_parser(
        "by-type",
        aliases=["organize-by-type"],
        help="Organize files by extension into folders",
    )
    by_type.add_argument("--source", "-s", default=".", help="Source directory to organize")
    by_type.add_argument("--target", "-t", help="Target directory (default: source)")
    by_type.add_argument(
        "--dry-run", "-n", action="store_true", help="Preview changes without executing"
    )
    by_type.set_defaults(handler=_run_by_type)

    by_date = subparsers.add_parser(
        "by-date",
        aliases=["organize-by-date"],
        help="Organize files by modification date",
    )
    by_date.add_argument("--source", "-s", default=".", help="Source directory to organize")
    by_date.add_argument("--target", "-t", help="Target directory (default: source)")
    by_date.add_argument(
        "--format", "-f",
        dest="date_format",
        default="month",
        help=f"Date format: {', '.join(config.date_formats)} (default: month)",
    )
    by_date.add_argument(
        "--dry-run", "-n", action="store_true", help="Preview changes without executing"
    )
    by_date.set_defaults(handler=_run_by_date)

    clean = subparsers.add_parser("clean", help="Clean up empty directories")
    clean.add_argument("--directory", "-d", default=".", help="Directory to clean")
    clean.add_argument(
        "--dry-run", "-n", action="store_true", help="Preview changes without executing"
    )
    clean.set_defaults(handler=_run_clean)

    stats = subparsers.add_parser("stats", help="Show file statistics for a directory")
    stats.add_argument("--directory", "-d", default=".", help="Directory to analyze")
    stats.set_defaults(handler=_run_stats)

    config_cmd = subparsers.add_parser("config", help="Generate a default configuration file")
    config_cmd.add_argument(
        "--output", "-o",
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Output path for config file (default: {DEFAULT_CONFIG_FILENAME})",
    )
    config_cmd.set_defaults(handler=_run_config)

    return parser


def _run_by_type(args: argparse.Namespace, config: Config, reporter: ConsoleReporter) -> None:
    source = _resolve(args.source)
    target = _resolve(args.target) if args.target else source

    if args.dry_run:
        reporter.dry_run_banner()
    reporter.header("Organizing files by type...", source, target)

    result = organize_by_type(
        source, target, dry_run=args.dry_run, config=config, report=reporter.outcome
    )
    reporter.move_summary(result)


def _run_by_date(args: argparse.Namespace, config: Config, reporter: ConsoleReporter) -> None:
    validate_date_format(args.date_format, config=config)
    source = _resolve(args.source)
    target = _resolve(args.target) if args.target else source

    if args.dry_run:
        reporter.dry_run_banner()
    reporter.header(f"Organizing files by date ({args.date_format})...", source, target)

    result = organize_by_date(
        source,
        target,
        date_format=args.date_format,
        dry_run=args.dry_run,
        config=config,
        report=reporter.outcome,
    )
    reporter.move_summary(result)


def _run_clean(args: argparse.Namespace, config: Config, reporter: ConsoleReporter) -> None:
    directory = _resolve(args.directory)

    if args.dry_run:
        reporter.dry_run_banner("directories", "removed")
    reporter.header("Cleaning empty directories...", directory)

    result = clean_empty_dirs(directory, dry_run=args.dry_run, report=reporter.outcome)
    reporter.clean_summary(result)


def _run_stats(args: argparse.Namespace, config: Config, reporter: ConsoleReporter) -> None:
    reporter.stats(collect_stats(_resolve(args.directory)))


def _run_config(args: argparse.Namespace, config: Config, reporter: ConsoleReporter) -> None:
    output = Path(args.output).expanduser()
    Config.generate_default(output)
    reporter.success(f"Generated config file: {output}")


def run(
    args: argparse.Namespace,
    config: Config = DEFAULT_CONFIG,
    reporter: Optional[ConsoleReporter] = None,
) -> int:
    """
    Run the selected command with the given arguments.

    Args:
        args: Parsed command-line arguments
        config: Configuration to use when --config is not given
        reporter: Output renderer (default: prints to stdout)

    Returns:
        Exit code (0 for success, 1 for error). Per-file errors during a
        move are reported but do not change the exit code.
    """
    reporter = reporter or ConsoleReporter()

    try:
        if args.config:
            config = Config.load_from_file(Path(args.config).expanduser())
        args.handler(args, config, reporter)
        return 0

    except (ForgError, OSError) as e:
        reporter.error(str(e))
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
