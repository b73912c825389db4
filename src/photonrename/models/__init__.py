"""Domain models for the photonrename application."""

from photonrename.models.config import RenameConfig
from photonrename.models.core import (
    ExtensionStat,
    FileStatus,
    ImageEntry,
    ScanResult,
)
from photonrename.models.plan import PlannedEntry, RenamePlan
from photonrename.models.scan import IMAGE_EXTENSIONS, ScanOptions

__all__ = [
    "ExtensionStat",
    "FileStatus",
    "IMAGE_EXTENSIONS",
    "ImageEntry",
    "PlannedEntry",
    "RenameConfig",
    "RenamePlan",
    "ScanOptions",
    "ScanResult",
]
