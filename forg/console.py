"""
Console rendering for forg.

Turns MoveOutcome values and summaries into tagged, colored lines.
Nothing in here touches the filesystem.
"""

from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .operations import STATS_TOP_LIMIT, DirectoryStats, MoveOutcome, OperationResult, Status
from .utils import NO_EXTENSION_LABEL, format_file_size

TAG_STYLES = {
    "PREVIEW": "blue",
    "MOVED": "green",
    "REMOVED": "green",
    "ERROR": "red",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "INFO": "cyan",
}


def tag(name: str) -> str:
    """Markup for a status tag like [MOVED]."""
    style = TAG_STYLES.get(name, "")
    return f"[{style}]\\[{name}][/{style}]" if style else f"\\[{name}]"


class ConsoleReporter:
    """Prints operation progress and summaries to a rich Console."""

    def __init__(
        self,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def info(self, message: str) -> None:
        self.console.print(f"{tag('INFO')} {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"{tag('SUCCESS')} {escape(message)}")

    def error(self, message: str) -> None:
        self.err_console.print(f"{tag('ERROR')} {escape(message)}")

    def dry_run_banner(self, noun: str = "files", verb: str = "moved") -> None:
        self.console.print(f"[bold yellow]\\[DRY RUN] No {noun} will be {verb}[/bold yellow]")

    def header(self, title: str, source: Path, target: Optional[Path] = None) -> None:
        self.info(title)
        if target is None:
            self.console.print(f"Directory: {escape(str(source))}")
        else:
            self.console.print(f"Source: {escape(str(source))}")
            self.console.print(f"Target: {escape(str(target))}")
        self.console.print()

    def outcome(self, outcome: MoveOutcome) -> None:
        """Render one outcome; used as the report callback of operations."""
        source = escape(str(outcome.source))
        destination = escape(str(outcome.destination)) if outcome.destination else ""

        if outcome.status is Status.PREVIEW:
            if outcome.destination is None:
                self.console.print(f"{tag('PREVIEW')} Would remove: {source}")
            else:
                self.console.print(f"{tag('PREVIEW')} {source} -> {destination}")
        elif outcome.status is Status.MOVED:
            self.console.print(f"{tag('MOVED')} {source} -> {destination}")
        elif outcome.status is Status.REMOVED:
            self.console.print(f"{tag('REMOVED')} {source}")
        elif outcome.status is Status.ERROR:
            self.err_console.print(
                f"{tag('ERROR')} Error processing {source}: {escape(outcome.error or '')}"
            )

    def move_summary(self, result: OperationResult) -> None:
        self.console.print()
        if result.dry_run:
            self.console.print(f"{tag('PREVIEW')} Would move {result.preview_count} files")
        else:
            self.console.print(f"{tag('SUCCESS')} Moved {result.moved_count} files")

        if result.error_count > 0:
            self.console.print(f"{tag('WARNING')} {result.error_count} errors occurred")

    def clean_summary(self, result: OperationResult) -> None:
        self.console.print()
        if result.dry_run:
            self.console.print(
                f"{tag('PREVIEW')} Would remove {result.preview_count} empty directories"
            )
        else:
            self.console.print(
                f"{tag('SUCCESS')} Removed {result.removed_count} empty directories"
            )

    def stats(self, stats: DirectoryStats, limit: int = STATS_TOP_LIMIT) -> None:
        self.info(f"File statistics for: {stats.directory}")
        self.console.print()
        self.console.print(f"[bold]Total files:[/bold] {stats.total_files}")
        self.console.print(f"[bold]Total size:[/bold] {format_file_size(stats.total_size)}")
        self.console.print()

        table = Table(title="File types", box=box.SIMPLE, title_justify="left")
        table.add_column("Extension", style="cyan")
        table.add_column("Files", justify="right", style="yellow")
        table.add_column("Size", justify="right", style="green")

        for label, bucket in stats.top(limit):
            name = label if label == NO_EXTENSION_LABEL else f".{label}"
            table.add_row(escape(name), str(bucket.count), format_file_size(bucket.total_size))

        self.console.print(table)

        omitted = stats.omitted_types(limit)
        if omitted > 0:
            self.console.print(f"  ... and {omitted} more types")
