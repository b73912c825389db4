"""Scan options and related models.

This module defines the configuration options for scanning an image folder in
photonrename.
- Used to parameterize directory scans from the CLI and the session.
- Kept separate from RenameConfig because a rescan is only needed when the
  root changes, not when naming options change.
"""

from pathlib import Path
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

# Fixed allow-list of image extensions (lower-case, dot included).
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".webp", ".gif", ".svg", ".tiff", ".bmp"}
)


class ScanOptions(BaseModel):
    """Options for scanning a folder of images."""

    root: Optional[Path] = None
    """Root directory to scan (None when the root comes from a picker)."""

    recursive: bool = False
    """Accepted for compatibility; only direct children are enumerated."""

    target_extensions: FrozenSet[str] = Field(default=IMAGE_EXTENSIONS)
    """Extensions eligible for scanning."""

    model_config = ConfigDict(arbitrary_types_allowed=True)
