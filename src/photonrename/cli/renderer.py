"""Renderer for CLI output.

This module renders rename plans, scan statistics and run results as Rich
tables.
- Status colors follow the same conventions across the preview and the
  post-run view, so an entry keeps its color when its status is unchanged.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from photonrename.core.apply import ApplyResult
from photonrename.models.core import FileStatus, ScanResult
from photonrename.models.plan import RenamePlan

STATUS_STYLES = {
    FileStatus.PENDING: "yellow bold",
    FileStatus.SUCCESS: "green bold",
    FileStatus.SKIPPED: "cyan",
    FileStatus.ERROR: "red bold",
}


def format_size(size: int) -> str:
    """Human-readable byte count (1024-based)."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def render_plan(plan: RenamePlan, console: Console | None = None) -> None:
    """Render a rename plan as a table followed by a one-line summary.

    Args:
        plan: The rename plan to render.
        console: Optional Console instance to use for rendering.
    """
    console = console or Console()

    table = Table(title=f"Rename Plan: {plan.id}")
    table.add_column("#", justify="right")
    table.add_column("Status", style="bold")
    table.add_column("Original", style="cyan")
    table.add_column("New Name", style="green")
    table.add_column("Reason", style="yellow")

    for index, item in enumerate(plan.items, start=1):
        table.add_row(
            str(index),
            item.status.value,
            escape(item.entry.path),
            escape(item.target_name),
            escape(item.error_message or ""),
            style=STATUS_STYLES.get(item.status, "white"),
        )

    console.print(table)
    counts = plan.count_by_status()
    console.print(
        f"Total: {len(plan.items)} | Conflicts: {counts[FileStatus.ERROR]}"
    )


def render_stats(scan_result: ScanResult, console: Console | None = None) -> None:
    """Render per-extension counts and sizes for a scan."""
    console = console or Console()

    table = Table(title="Scanned Images")
    table.add_column("Type")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    for stat in scan_result.extension_stats():
        table.add_row(stat.name, str(stat.count), format_size(stat.size))
    table.add_row(
        "All",
        str(len(scan_result.files)),
        format_size(scan_result.total_size),
        style="bold",
    )
    console.print(table)


def render_apply_result(result: ApplyResult, console: Console | None = None) -> None:
    """Print the outcome of a batch run."""
    console = console or Console()

    if result.dry_run:
        console.print("[cyan]Dry run: no files were changed.[/cyan]")
        return
    console.print(
        f"Renamed: {result.renamed} | Unchanged: {result.unchanged} | "
        f"Skipped: {result.skipped} | Failed: {result.failed} "
        f"({result.duration:.2f}s)"
    )
    for item in result.failures:
        message = escape(item.error_message or "")
        console.print(f"[red]{escape(item.entry.path)}: {message}[/red]")
