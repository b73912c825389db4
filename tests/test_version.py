"""Test version import works correctly.

Guards against packaging errors where __version__ is missing or not set.
"""

from photonrename import __version__


def test_version() -> None:
    """Test that version is a string and non-empty."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0


def test_version_command_prints_version() -> None:
    """The version command reports the same version the package exposes."""
    from typer.testing import CliRunner

    from photonrename.cli.commands import app

    result = CliRunner().invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout
