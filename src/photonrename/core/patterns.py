"""Token expansion for rename patterns.

Supported tokens, substituted in this fixed order:

* ``{name}``  original file name without extension
* ``{date}``  last-modified date as ``YYYY-MM-DD`` (UTC)
* ``{num}`` / ``{num:NNN}``  sequence number; the digit count written after
  the colon is the zero-padding width (``{num:003}`` pads to 3)

Prefix and suffix are concatenated literally after substitution, so tokens
inside them are never expanded.
"""

import re
from datetime import datetime, timezone
from typing import Optional

from photonrename.models.config import RenameConfig
from photonrename.models.core import ImageEntry

NUM_TOKEN = re.compile(r"\{num(?::(\d+))?\}")
NAME_TOKEN = "{name}"
DATE_TOKEN = "{date}"


def format_date(value: datetime) -> str:
    """Render *value* as a UTC calendar date; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d")


def format_number(number: int, width: Optional[int] = None) -> str:
    """Render *number* in decimal, zero-padding its digits to *width*.

    The sign is kept in front of the padding: ``format_number(-5, 3) == "-005"``.
    """
    digits = str(abs(number))
    if width:
        digits = digits.zfill(width)
    return f"-{digits}" if number < 0 else digits


def expand_pattern(entry: ImageEntry, config: RenameConfig, number: int) -> str:
    """Compute the new name (without extension) for *entry*.

    Args:
        entry: The scanned entry; only its name and timestamp are read.
        config: Supplies the pattern, prefix and suffix.
        number: Value for the sequence token.

    Returns:
        The expanded name wrapped in the configured prefix and suffix.
    """
    name = config.pattern.replace(NAME_TOKEN, entry.original_name)
    name = name.replace(DATE_TOKEN, format_date(entry.last_modified))
    name = NUM_TOKEN.sub(
        lambda m: format_number(number, len(m.group(1)) if m.group(1) else None),
        name,
    )
    return f"{config.prefix}{name}{config.suffix}"
