"""Rename configuration model.

This module defines the immutable configuration value that parameterizes one
planning/execution pass.
- Read by the planner (pattern, numbering, prefix/suffix, overwrite) and the
  executor (dry run, resize options, keep originals).
- Validated on construction so downstream code never re-checks ranges.
"""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PATTERN = "{name}_{num:001}"
DEFAULT_RESIZE_WIDTH = 1920
DEFAULT_RESIZE_QUALITY = 90


class RenameConfig(BaseModel):
    """Options for one planning/execution pass.

    Instances are frozen; build a new one (``model_copy(update=...)``) to
    change a setting.
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = DEFAULT_PATTERN
    """Template string; tokens {name}, {date}, {num} and {num:NNN}."""

    start_number: int = 1
    """Value of the {num} token for the first entry in scan order."""

    recursive: bool = False
    """Accepted for compatibility; subdirectories are never traversed."""

    dry_run: bool = False
    """When True, execution performs no storage I/O and leaves statuses alone."""

    overwrite: bool = False
    """When True, colliding target names are left pending instead of erroring."""

    prefix: str = ""
    """Literal text prepended after token substitution."""

    suffix: str = ""
    """Literal text appended after token substitution."""

    enable_resize: bool = False
    """Gate for the resize transform during execution."""

    resize_width: int = Field(default=DEFAULT_RESIZE_WIDTH, gt=0)
    """Target width in pixels; images are only ever downsized."""

    resize_quality: int = Field(default=DEFAULT_RESIZE_QUALITY, ge=1, le=100)
    """Encode quality for lossy output formats (1-100)."""

    keep_originals: bool = False
    """Write transformed output alongside the source instead of replacing it."""
