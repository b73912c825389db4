"""Models for rename plans.

This module defines the data structures for representing planned renames in
photonrename.
- Used to preview, validate, and report planned file operations before and
  after execution.
- A plan is recreated from scratch by every planner pass; the executor records
  per-entry outcomes on the items in place.

Design:
- Each PlannedEntry wraps the immutable ImageEntry it was computed from, plus
  the computed target name and a status.
- RenamePlan keeps the RenameConfig that produced it so execution always runs
  with the same options the preview was built from.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from photonrename.models.config import RenameConfig
from photonrename.models.core import FileStatus, ImageEntry

__all__: list[str] = [
    "PlannedEntry",
    "RenamePlan",
    "FileStatus",
]


class PlannedEntry(BaseModel):
    """A single entry of a rename plan."""

    entry: ImageEntry
    """The scanned image this item was planned from."""

    new_name: str
    """Computed target name, extension excluded."""

    status: FileStatus = FileStatus.PENDING
    """Current status (pending/error after planning; success/error after a run)."""

    error_message: Optional[str] = None
    """Reason for a conflict or execution failure, if any."""

    @property
    def target_name(self: "PlannedEntry") -> str:
        """Full target name (new name plus extension)."""
        return f"{self.new_name}{self.entry.extension}"

    @property
    def target_key(self: "PlannedEntry") -> str:
        """Case-insensitive key used for collision checks."""
        return self.target_name.lower()

    @property
    def is_unchanged(self: "PlannedEntry") -> bool:
        """Whether the target name equals the original on-disk name."""
        return self.target_name == self.entry.full_name


class RenamePlan(BaseModel):
    """An ordered collection of planned entries produced by one planner pass."""

    id: str = Field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))
    """Identifier for this plan (timestamp based, for display only)."""

    created_at: datetime = Field(default_factory=datetime.now)
    """Timestamp when this plan was created."""

    root_dir: Optional[Path] = None
    """Directory the entries were scanned from."""

    config: RenameConfig = Field(default_factory=RenameConfig)
    """The configuration the plan was computed with."""

    items: List[PlannedEntry] = Field(default_factory=list)
    """Planned entries, in scan order."""

    def count_by_status(self: "RenamePlan") -> Dict[FileStatus, int]:
        """Count items per status (every status present, zero when unused)."""
        counts = {status: 0 for status in FileStatus}
        for item in self.items:
            counts[item.status] += 1
        return counts

    @property
    def conflicts(self: "RenamePlan") -> List[PlannedEntry]:
        """Items currently in ERROR status."""
        return [item for item in self.items if item.status == FileStatus.ERROR]
