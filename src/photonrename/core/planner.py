"""Rename planner for image files.

This module computes the target name and status of every scanned entry for
one RenameConfig and detects naming conflicts inside the batch.

Planning is a pure function of (entries, config): it never touches storage,
never raises for a single bad entry, and returns fresh PlannedEntry objects on
every call. Anomalies are encoded as entry status.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from photonrename.core.patterns import expand_pattern
from photonrename.models.config import RenameConfig
from photonrename.models.core import FileStatus, ImageEntry
from photonrename.models.plan import PlannedEntry, RenamePlan

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "Conflict: Filename already exists in destination"


def target_key(new_name: str, extension: str) -> str:
    """Case-insensitive collision key for a full target name."""
    return f"{new_name}{extension}".lower()


def _conflicts(keys: Iterable[str], overwrite: bool) -> Iterator[bool]:
    """Fold over *keys* in order, yielding whether each one collides.

    The set of keys seen so far is the accumulator. Every key is added to it,
    colliding or not, so a third duplicate is flagged just like the second.
    """
    seen: set[str] = set()
    for key in keys:
        yield key in seen and not overwrite
        seen.add(key)


def generate_preview(
    entries: Sequence[ImageEntry], config: RenameConfig
) -> List[PlannedEntry]:
    """Plan every entry, preserving input order.

    The sequence number of the entry at position *i* is always
    ``config.start_number + i``, whatever the conflict outcome of any entry.

    Args:
        entries: Entries in scan order.
        config: Naming and conflict options.

    Returns:
        One PENDING or ERROR PlannedEntry per input entry.
    """
    names = [
        expand_pattern(entry, config, config.start_number + index)
        for index, entry in enumerate(entries)
    ]
    keys = (target_key(name, entry.extension) for name, entry in zip(names, entries))
    items: List[PlannedEntry] = []
    for entry, name, conflict in zip(entries, names, _conflicts(keys, config.overwrite)):
        if conflict:
            items.append(
                PlannedEntry(
                    entry=entry,
                    new_name=name,
                    status=FileStatus.ERROR,
                    error_message=CONFLICT_MESSAGE,
                )
            )
        else:
            items.append(PlannedEntry(entry=entry, new_name=name))
    return items


def create_rename_plan(
    entries: Sequence[ImageEntry],
    config: RenameConfig,
    *,
    root_dir: Optional[Path] = None,
    plan_id: Optional[str] = None,
) -> RenamePlan:
    """Create a rename plan from scanned entries.

    Args:
        entries: Entries in scan order.
        config: The configuration to plan (and later execute) with.
        root_dir: Directory the entries came from, for display.
        plan_id: Optional plan ID, defaults to a timestamp-based ID.

    Returns:
        A RenamePlan carrying *config* and the planned items.
    """
    items = generate_preview(entries, config)
    extra = {"id": plan_id} if plan_id is not None else {}
    plan = RenamePlan(root_dir=root_dir, config=config, items=items, **extra)
    logger.debug(
        "Planned %d items, %d conflicts", len(plan.items), len(plan.conflicts)
    )
    return plan
