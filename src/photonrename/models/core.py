"""Core domain models for photonrename.

This module defines the foundational data structures for image scanning and
planning.
- Used throughout photonrename for representing scanned images, scan results,
  and entry statuses.
- Entries are immutable once scanned; only planned entries carry mutable
  execution state (see models.plan).

Design:
- FileStatus provides a clear, type-safe lifecycle for every planned entry.
- ImageEntry encapsulates all metadata needed for naming and later execution.
  The storage handle is opaque to everything except the executor.
- ScanResult aggregates scan output and the per-extension statistics shown in
  the CLI summary.
"""

import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """Status of a planned entry.

    Planning only ever produces PENDING or ERROR; SUCCESS and SKIPPED appear
    once the executor has run.
    """

    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"


def new_entry_id() -> str:
    """Return a fresh opaque identifier for a scanned entry."""
    return uuid.uuid4().hex


class ImageEntry(BaseModel):
    """An image file discovered during scanning.

    Used as the atomic unit for scan results and rename plans.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = Field(default_factory=new_entry_id)
    """Unique identifier generated at scan time."""

    original_name: str
    """Filename without its trailing extension."""

    extension: str
    """Last dot-delimited suffix, dot included, lower-cased (e.g. '.jpg')."""

    path: str
    """Name of the file as seen inside its storage root."""

    size: int
    """Size of the file in bytes."""

    last_modified: datetime
    """Last modification timestamp (timezone-aware)."""

    preview_url: Optional[str] = None
    """Ephemeral display handle (file:// URI); not used for planning."""

    handle: Optional[Any] = Field(default=None, exclude=True, repr=False)
    """Opaque storage reference, resolved only by the executor."""

    @property
    def full_name(self: "ImageEntry") -> str:
        """Return the on-disk name recomposed from name and extension."""
        return f"{self.original_name}{self.extension}"


class ExtensionStat(BaseModel):
    """Count and total size of scanned files sharing one extension."""

    name: str
    count: int = 0
    size: int = 0


class ScanResult(BaseModel):
    """Result of an image scan operation."""

    files: List[ImageEntry] = Field(default_factory=list)
    """Image entries in scan order (sorted by original name)."""

    root_dir: Optional[Path] = None
    """Root directory of the scan, if one was opened."""

    scan_time: datetime = Field(default_factory=datetime.now)
    """When the scan was run."""

    skipped_files: int = 0
    """Number of directory children that were not eligible images."""

    cancelled: bool = False
    """True when the user aborted root selection (an empty, non-error result)."""

    errors: List[str] = Field(default_factory=list)
    """Per-file problems that caused a candidate to be left out of the scan."""

    @property
    def total_size(self: "ScanResult") -> int:
        """Sum of the sizes of all scanned entries in bytes."""
        return sum(f.size for f in self.files)

    def extension_stats(self: "ScanResult") -> List[ExtensionStat]:
        """Group the scanned entries by extension.

        Returns:
            One ExtensionStat per extension, named without the dot and upper-
            cased ('JPG'), in order of first appearance.
        """
        stats: Dict[str, ExtensionStat] = {}
        for entry in self.files:
            key = entry.extension.upper().replace(".", "")
            stat = stats.setdefault(key, ExtensionStat(name=key))
            stat.count += 1
            stat.size += entry.size
        return list(stats.values())
