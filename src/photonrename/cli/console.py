"""Rich console and progress helpers shared by the CLI commands.

* ``ConsoleManager`` opens a Console for the duration of one command and
  installs Rich tracebacks on it.
* Plain output is selected with ``--no-rich`` or by exporting
  ``PHOTONRENAME_NO_RICH=1`` (handy when piping ``scan --json``).
* ``create_default_progress`` builds the progress bar used while a batch runs.
"""

from __future__ import annotations

import os
from contextlib import AbstractContextManager
from types import TracebackType
from typing import Any

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.traceback import install as install_rich_traceback

__all__ = [
    "ENV_DISABLE_RICH",
    "ConsoleManager",
    "FilenameColumn",
    "create_default_progress",
    "rich_enabled",
]

ENV_DISABLE_RICH = "PHOTONRENAME_NO_RICH"
_FALSY = {"", "0", "false", "no"}

# Raised by commands to end normally or after a declined prompt.
_CONTROL_FLOW = (typer.Exit, typer.Abort)


def rich_enabled() -> bool:
    """Return False once ``PHOTONRENAME_NO_RICH`` holds a truthy value."""
    return os.getenv(ENV_DISABLE_RICH, "0").strip().lower() in _FALSY


class ConsoleManager(AbstractContextManager):
    """Yield a Console configured for the current output mode.

    Args:
        record: Keep a copy of everything printed, for ``export_text``.
        force_use: Force styled (True) or plain (False) output instead of
            reading ``PHOTONRENAME_NO_RICH``.
        **console_kwargs: Passed through to :class:`rich.console.Console`.
    """

    def __init__(
        self,
        *,
        record: bool = False,
        force_use: bool | None = None,
        **console_kwargs: Any,
    ) -> None:
        self.styled = rich_enabled() if force_use is None else force_use
        self.options: dict[str, Any] = {"record": record, **console_kwargs}
        if not self.styled:
            self.options.update(color_system=None, force_terminal=False, no_color=True)
        self.console: Console | None = None

    def __enter__(self) -> Console:
        self.console = Console(**self.options)
        install_rich_traceback(show_locals=False, console=self.console)
        return self.console

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool:
        if self.console is None:
            return False
        if exc_type is not None and not issubclass(exc_type, _CONTROL_FLOW):
            self.console.print_exception()
        self.console.file.flush()
        return False


class FilenameColumn(TextColumn):
    """Show the ``filename`` field of a progress task."""

    def __init__(self) -> None:
        super().__init__("{task.fields[filename]}")


def create_default_progress(console: Console) -> Progress:
    """Progress bar for batch runs.

    Columns: description, bar, percentage, elapsed time, current file. Tasks
    must be created with a ``filename`` field.
    """
    return Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        FilenameColumn(),
        console=console,
    )
