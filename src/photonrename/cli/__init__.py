"""Command-line interface for photonrename.

This package provides the Typer app shared by all CLI commands.

- app: The Typer application object; commands are registered on it in
  ``photonrename.cli.commands``.
- The --no-rich and --verbose global options are handled by the callback.
"""

import os

import typer

from photonrename.cli.console import ENV_DISABLE_RICH
from photonrename.utils.debug import setup_logger

app = typer.Typer(
    name="photonrename",
    help="Batch rename and downsize the images in a folder.",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output and progress bars. "
            "Can also be set with the PHOTONRENAME_NO_RICH environment variable."
        ),
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log every file operation."
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        os.environ[ENV_DISABLE_RICH] = "1"
    setup_logger(verbose=verbose)
