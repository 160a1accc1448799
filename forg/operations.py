"""
Core file operations for forg.

These functions perform the actual file system operations (move, rmdir).
They never print: every file produces a MoveOutcome that is collected in
the returned result and handed to an optional report callback, so the CLI
decides how to render it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Tuple

from .config import Config, DEFAULT_CONFIG
from .errors import InvalidPathError
from .scanner import scan_deep, scan_shallow
from .utils import (
    format_date_bucket,
    get_category,
    get_file_mtime,
    get_stats_label,
    is_empty_dir,
    validate_date_format,
)

logger = logging.getLogger(__name__)

STATS_TOP_LIMIT = 10


class Status(Enum):
    PREVIEW = "preview"
    MOVED = "moved"
    SKIPPED = "skipped"
    ERROR = "error"
    REMOVED = "removed"


@dataclass(frozen=True)
class MoveOutcome:
    """What happened to one file (or directory) during an operation."""
    status: Status
    source: Path
    destination: Optional[Path] = None
    error: Optional[str] = None
    reason: str = ""


@dataclass
class OperationResult:
    """Result of an operation with statistics."""
    dry_run: bool = False
    outcomes: List[MoveOutcome] = field(default_factory=list)
    moved_count: int = 0
    preview_count: int = 0
    skip_count: int = 0
    error_count: int = 0
    removed_count: int = 0

    def record(self, outcome: MoveOutcome) -> None:
        self.outcomes.append(outcome)
        if outcome.status is Status.MOVED:
            self.moved_count += 1
        elif outcome.status is Status.PREVIEW:
            self.preview_count += 1
        elif outcome.status is Status.SKIPPED:
            self.skip_count += 1
        elif outcome.status is Status.ERROR:
            self.error_count += 1
        elif outcome.status is Status.REMOVED:
            self.removed_count += 1

    @property
    def errors(self) -> List[MoveOutcome]:
        return [o for o in self.outcomes if o.status is Status.ERROR]


# Type alias for the per-outcome callback
ReportCallback = Callable[[MoveOutcome], None]


def _no_report(outcome: MoveOutcome) -> None:
    """Default callback: outcomes are only collected in the result."""


def _require_directory(directory: Path) -> None:
    if not directory.is_dir():
        raise InvalidPathError(f"'{directory}' is not a valid directory")


def _move_file(
    source: Path,
    target: Path,
    folder_for: Callable[[Path], str],
    dry_run: bool,
) -> MoveOutcome:
    """Move one file into its folder under target, or describe the move in dry-run."""
    try:
        destination = target / folder_for(source) / source.name
    except OSError as e:
        logger.warning("Failed to read metadata of %s: %s", source, e)
        return MoveOutcome(Status.ERROR, source, error=str(e))

    if source == destination:
        logger.debug("Already organized: %s", source)
        return MoveOutcome(Status.SKIPPED, source, destination, reason="already organized")

    if dry_run:
        return MoveOutcome(Status.PREVIEW, source, destination)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        source.rename(destination)
    except OSError as e:
        logger.warning("Failed to move %s -> %s: %s", source, destination, e)
        return MoveOutcome(Status.ERROR, source, destination, error=str(e))

    logger.debug("Moved %s -> %s", source, destination)
    return MoveOutcome(Status.MOVED, source, destination)


def _organize(
    source: Path,
    target: Path,
    folder_for: Callable[[Path], str],
    dry_run: bool,
    report: ReportCallback,
) -> OperationResult:
    result = OperationResult(dry_run=dry_run)

    for file_path in scan_shallow(source):
        outcome = _move_file(file_path, target, folder_for, dry_run)
        result.record(outcome)
        report(outcome)

    return result


def organize_by_type(
    source: Path,
    target: Optional[Path] = None,
    dry_run: bool = False,
    config: Config = DEFAULT_CONFIG,
    report: ReportCallback = _no_report,
) -> OperationResult:
    """
    Move the files directly inside source into category folders.

    Args:
        source: Directory whose files are organized (subfolders are left alone)
        target: Directory that receives the category folders (default: source)
        dry_run: If True, only preview changes without moving files
        config: Configuration to use
        report: Callback invoked once per file with its outcome

    Returns:
        OperationResult with one outcome per file

    Raises:
        InvalidPathError: If source is not a directory
    """
    _require_directory(source)
    target = source if target is None else target
    logger.info("Organizing %s by type into %s (dry_run=%s)", source, target, dry_run)

    return _organize(
        source,
        target,
        lambda path: get_category(path, config=config),
        dry_run,
        report,
    )


def organize_by_date(
    source: Path,
    target: Optional[Path] = None,
    date_format: str = "month",
    dry_run: bool = False,
    config: Config = DEFAULT_CONFIG,
    report: ReportCallback = _no_report,
) -> OperationResult:
    """
    Move the files directly inside source into folders named after their
    modification date.

    Args:
        source: Directory whose files are organized
        target: Directory that receives the date folders (default: source)
        date_format: "year" (2024), "month" (2024-03) or "day" (2024-03-15)
        dry_run: If True, only preview changes without moving files
        config: Configuration to use
        report: Callback invoked once per file with its outcome

    Returns:
        OperationResult with one outcome per file

    Raises:
        InvalidDateFormatError: If date_format is not recognized; no file is touched
        InvalidPathError: If source is not a directory
    """
    validate_date_format(date_format, config=config)
    _require_directory(source)
    target = source if target is None else target
    logger.info(
        "Organizing %s by date (%s) into %s (dry_run=%s)", source, date_format, target, dry_run
    )

    return _organize(
        source,
        target,
        lambda path: format_date_bucket(get_file_mtime(path), date_format, config=config),
        dry_run,
        report,
    )


def clean_empty_dirs(
    directory: Path,
    dry_run: bool = False,
    report: ReportCallback = _no_report,
) -> OperationResult:
    """
    Remove empty directories below directory, deepest first.

    Removing a leaf can leave its parent empty; because parents are visited
    after their children, the parent is removed in the same pass. The root
    directory itself is never removed.

    Args:
        directory: Root of the tree to clean
        dry_run: If True, only preview which directories would be removed
        report: Callback invoked once per removed (or removable) directory

    Returns:
        OperationResult with one outcome per directory

    Raises:
        InvalidPathError: If directory is not a directory
        OSError: If a directory cannot be listed or removed
    """
    _require_directory(directory)
    logger.info("Cleaning empty directories in %s (dry_run=%s)", directory, dry_run)

    result = OperationResult(dry_run=dry_run)

    dirs = [entry.path for entry in scan_deep(directory) if entry.is_dir]
    dirs.sort(key=lambda p: len(p.parts), reverse=True)

    # Directories the dry run pretends to have removed
    removed: Set[Path] = set()

    for dir_path in dirs:
        if dry_run:
            if not all(child in removed for child in dir_path.iterdir()):
                continue
            removed.add(dir_path)
            outcome = MoveOutcome(Status.PREVIEW, dir_path)
        else:
            if not is_empty_dir(dir_path):
                continue
            dir_path.rmdir()
            logger.debug("Removed %s", dir_path)
            outcome = MoveOutcome(Status.REMOVED, dir_path)

        result.record(outcome)
        report(outcome)

    return result


@dataclass
class ExtensionStats:
    count: int = 0
    total_size: int = 0


@dataclass
class DirectoryStats:
    """File counts and sizes per extension for a directory tree."""
    directory: Path
    total_files: int = 0
    total_size: int = 0
    by_extension: Dict[str, ExtensionStats] = field(default_factory=dict)

    def add(self, label: str, size: int) -> None:
        bucket = self.by_extension.setdefault(label, ExtensionStats())
        bucket.count += 1
        bucket.total_size += size
        self.total_files += 1
        self.total_size += size

    def top(self, limit: int = STATS_TOP_LIMIT) -> List[Tuple[str, ExtensionStats]]:
        """Buckets with the most files first; ties ordered by label."""
        ranked = sorted(self.by_extension.items(), key=lambda item: (-item[1].count, item[0]))
        return ranked[:limit]

    def omitted_types(self, limit: int = STATS_TOP_LIMIT) -> int:
        return max(len(self.by_extension) - limit, 0)


def collect_stats(directory: Path) -> DirectoryStats:
    """
    Count files and bytes per lowercased extension, at any depth.

    Files without an extension are counted under "no extension".

    Raises:
        InvalidPathError: If directory is not a directory
    """
    _require_directory(directory)
    stats = DirectoryStats(directory=directory)

    for entry in scan_deep(directory):
        if entry.is_dir:
            continue
        stats.add(get_stats_label(entry.path), entry.size)

    return stats
