"""Core functionality for photonrename.

This package exposes the scan -> plan -> apply pipeline:
- scan_directory: lists the image files directly inside a folder.
- create_rename_plan: computes target names and flags conflicts (pure).
- apply_plan: executes a plan sequentially, continuing past failed entries.

See the individual modules for the exact rules.
"""

from photonrename.core.apply import ApplyResult, apply_plan
from photonrename.core.planner import create_rename_plan, generate_preview
from photonrename.core.scanner import scan_directory

__all__ = [
    "ApplyResult",
    "apply_plan",
    "create_rename_plan",
    "generate_preview",
    "scan_directory",
]
