"""CLI commands for photonrename.

This module implements all user-facing CLI commands: scan (preview), rename
(preview + execute), config and version.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through a Rich Console from ConsoleManager.
- Every rename option may be omitted on the command line, in which case it is
  resolved from the environment, then config.toml, then the built-in default.

Design:
- Annotated aliases define each option once and are shared by scan and rename.
- ExitCode: 0 success, 1 error or failed entries, 2 unresolved naming conflicts.
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from photonrename.cli import app
from photonrename.cli.console import ConsoleManager, create_default_progress
from photonrename.cli.renderer import render_apply_result, render_plan, render_stats
from photonrename.core.errors import ScanAccessError, ScanCancelled
from photonrename.core.session import RenameSession
from photonrename.fs.storage import LocalStorageRoot, StorageRoot
from photonrename.models.config import RenameConfig
from photonrename.models.plan import PlannedEntry
from photonrename.models.scan import ScanOptions
from photonrename.utils import config as settings
from photonrename.utils.json import dumps


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    CONFLICTS = 2


ROOT_PATH = Annotated[
    Optional[Path],
    typer.Argument(
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        show_default=False,
        help="Folder of images. Prompted for when omitted.",
    ),
]
PATTERN = Annotated[
    Optional[str],
    typer.Option(
        "--pattern",
        "-p",
        help="Name template; tokens {name}, {date}, {num}, {num:001}.",
    ),
]
START_NUMBER = Annotated[
    Optional[int],
    typer.Option("--start", "-s", help="Value of {num} for the first file."),
]
PREFIX = Annotated[
    Optional[str], typer.Option("--prefix", help="Literal text before the name.")
]
SUFFIX = Annotated[
    Optional[str], typer.Option("--suffix", help="Literal text after the name.")
]
OVERWRITE = Annotated[
    Optional[bool],
    typer.Option(
        "--overwrite/--no-overwrite",
        help="Let duplicate target names proceed instead of marking them as errors.",
    ),
]
RECURSIVE = Annotated[
    Optional[bool],
    typer.Option(
        "--recursive/--no-recursive",
        help="Accepted for compatibility; subfolders are not scanned.",
    ),
]
DRY_RUN = Annotated[
    Optional[bool],
    typer.Option("--dry-run/--no-dry-run", help="Preview only; change nothing."),
]
ENABLE_RESIZE = Annotated[
    Optional[bool],
    typer.Option("--resize/--no-resize", help="Downsize images wider than --width."),
]
RESIZE_WIDTH = Annotated[
    Optional[int],
    typer.Option("--width", min=1, help="Target width in pixels when resizing."),
]
RESIZE_QUALITY = Annotated[
    Optional[int],
    typer.Option("--quality", min=1, max=100, help="JPEG/WEBP quality (1-100)."),
]
KEEP_ORIGINALS = Annotated[
    Optional[bool],
    typer.Option(
        "--keep-originals/--replace-originals",
        help="Write output next to the source instead of replacing it.",
    ),
]
JSON_OUTPUT = Annotated[
    bool, typer.Option("--json", help="Output the plan in JSON format.")
]
YES = Annotated[
    bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")
]


def _prompt_picker() -> StorageRoot:
    """Ask for a folder on the terminal; an empty answer or Ctrl-C cancels."""
    try:
        answer = typer.prompt("Folder to scan", default="", show_default=False)
    except typer.Abort as e:
        raise ScanCancelled() from e
    if not answer.strip():
        raise ScanCancelled()
    return LocalStorageRoot(Path(answer.strip()).expanduser())


def _load_session(
    console: Console,
    root: Optional[Path],
    config: RenameConfig,
    show_stats: bool = True,
) -> RenameSession:
    """Scan *root* (or the prompted folder) into a new session.

    Exits with SUCCESS on cancel or when no images are found, ERROR when the
    folder cannot be read.
    """
    session = RenameSession(config=config)
    options = ScanOptions(root=root, recursive=config.recursive)
    try:
        if root is None:
            # No spinner while the folder prompt is waiting for input.
            result = session.scan(_prompt_picker, options)
        else:
            with console.status("[cyan]Scanning folder...", spinner="dots"):
                result = session.scan(root, options)
    except ScanAccessError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(ExitCode.ERROR)
    if result.cancelled:
        console.print("[yellow]Scan cancelled.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)
    for problem in result.errors:
        console.print(f"[yellow]{escape(problem)}[/yellow]")
    if not result.files:
        console.print("[yellow]No images found.[/yellow]")
        raise typer.Exit(ExitCode.SUCCESS)
    if show_stats:
        render_stats(result, console=console)
    return session


@app.command()
def scan(  # noqa: PLR0913
    root: ROOT_PATH = None,
    pattern: PATTERN = None,
    start_number: START_NUMBER = None,
    prefix: PREFIX = None,
    suffix: SUFFIX = None,
    overwrite: OVERWRITE = None,
    recursive: RECURSIVE = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Scan a folder and preview the rename plan without changing anything."""
    config = settings.resolve_rename_config(
        pattern=pattern,
        start_number=start_number,
        prefix=prefix,
        suffix=suffix,
        overwrite=overwrite,
        recursive=recursive,
    )
    with ConsoleManager() as console:
        session = _load_session(console, root, config, show_stats=not json_output)
        plan = session.plan
        if json_output:
            sys.stdout.write(dumps(plan.model_dump()) + "\n")
        else:
            render_plan(plan, console=console)
        if plan.conflicts:
            if not json_output:
                console.print(
                    f"\n[bold yellow]Warning:[/bold yellow] {len(plan.conflicts)} "
                    "file(s) have conflicting names and will be skipped. "
                    "Change the pattern or use --overwrite."
                )
            raise typer.Exit(ExitCode.CONFLICTS)


@app.command()
def rename(  # noqa: PLR0913
    root: ROOT_PATH = None,
    pattern: PATTERN = None,
    start_number: START_NUMBER = None,
    prefix: PREFIX = None,
    suffix: SUFFIX = None,
    overwrite: OVERWRITE = None,
    recursive: RECURSIVE = None,
    dry_run: DRY_RUN = None,
    enable_resize: ENABLE_RESIZE = None,
    resize_width: RESIZE_WIDTH = None,
    resize_quality: RESIZE_QUALITY = None,
    keep_originals: KEEP_ORIGINALS = None,
    yes: YES = False,
) -> None:
    """Rename (and optionally downsize) the images in a folder."""
    config = settings.resolve_rename_config(
        pattern=pattern,
        start_number=start_number,
        prefix=prefix,
        suffix=suffix,
        overwrite=overwrite,
        recursive=recursive,
        dry_run=dry_run,
        enable_resize=enable_resize,
        resize_width=resize_width,
        resize_quality=resize_quality,
        keep_originals=keep_originals,
    )
    with ConsoleManager() as console:
        session = _load_session(console, root, config)
        render_plan(session.plan, console=console)

        total = len(session.plan.items)
        if config.dry_run:
            result = session.execute()
        else:
            pending = total - len(session.plan.conflicts)
            if not yes and not typer.confirm(f"Apply changes to {pending} file(s)?"):
                console.print("Aborted.")
                raise typer.Exit(ExitCode.SUCCESS)

            with create_default_progress(console) as progress:
                task = progress.add_task("Renaming", total=total, filename="")

                def on_progress(fraction: float, item: PlannedEntry) -> None:
                    progress.update(
                        task,
                        completed=fraction * total,
                        filename=escape(item.entry.path),
                    )

                result = session.execute(progress_callback=on_progress)
            render_plan(session.plan, console=console)

        render_apply_result(result, console=console)
        if not result.success:
            raise typer.Exit(ExitCode.ERROR)


config_app = typer.Typer(help="Show or change default rename options.")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show() -> None:
    """Show the effective default for every rename option."""
    with ConsoleManager() as console:
        console.print(f"Config file: {settings.CONFIG_FILE}")
        for name, value in settings.resolve_rename_config().model_dump().items():
            console.print(escape(f"{name} = {value!r}"))


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Option name, e.g. pattern.")],
    value: Annotated[str, typer.Argument(help="New default value.")],
) -> None:
    """Store a default value for a rename option."""
    with ConsoleManager() as console:
        try:
            stored = settings.set_rename_default(key, value)
        except KeyError:
            valid = ", ".join(settings.rename_setting_names())
            console.print(f"[red]Unknown option {key!r}. Valid options: {valid}[/red]")
            raise typer.Exit(ExitCode.ERROR)
        except ValueError as e:
            console.print(f"[red]Invalid value for {key}: {escape(str(e))}[/red]")
            raise typer.Exit(ExitCode.ERROR)
        console.print(escape(f"Saved {key} = {stored!r}"))


@app.command()
def version() -> None:
    """Show the version of photonrename."""
    from photonrename.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"PhotonRename version: [bold]{__version__}[/bold]")


def main() -> None:
    """Main entry point for the CLI."""
    app()
