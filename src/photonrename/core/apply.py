"""Apply engine for rename plans.

This module executes a RenamePlan against a storage root, one entry at a time.
- Entries already in ERROR after planning are never attempted.
- Each pending entry is optionally resized, written under its new name and,
  once the write has committed, its original is removed.
- A failing entry is marked ERROR with the cause and the batch continues; there
  is no rollback and no retry.
"""

import logging
import time as time_mod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from photonrename.core.errors import EntryError, WriteError
from photonrename.core.resizer import (
    is_raster,
    mime_type_for,
    probe_size,
    resize,
    should_resize,
)
from photonrename.fs.storage import StorageHandle, StorageRoot
from photonrename.models.config import RenameConfig
from photonrename.models.core import FileStatus
from photonrename.models.plan import PlannedEntry, RenamePlan

logger = logging.getLogger(__name__)

RESIZED_MARKER = "_resized"

ProgressCallback = Callable[[float, PlannedEntry], None]


@dataclass
class ApplyResult:
    """Result of applying a rename plan."""

    success: bool
    failures: List[PlannedEntry] = field(default_factory=list)
    duration: float = 0.0
    renamed: int = 0
    unchanged: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False


def final_name(item: PlannedEntry, config: RenameConfig) -> str:
    """On-disk name the entry is written to.

    When originals are kept and resizing is on, a marker is inserted before the
    extension so the output can never replace its source.
    """
    if config.keep_originals and config.enable_resize:
        return f"{item.new_name}{RESIZED_MARKER}{item.entry.extension}"
    return item.target_name


def _handle_for(item: PlannedEntry, storage: StorageRoot) -> StorageHandle:
    handle = item.entry.handle
    if isinstance(handle, StorageHandle):
        return handle
    return StorageHandle(storage, item.entry.path)


def _transform(data: bytes, item: PlannedEntry, config: RenameConfig) -> bytes:
    mime_type = mime_type_for(item.entry.extension)
    if not is_raster(mime_type):
        return data
    width, _ = probe_size(data)
    if not should_resize(width, config.resize_width):
        return data
    return resize(
        data,
        mime_type,
        config.resize_width,
        config.resize_quality,
    )


def apply_entry(item: PlannedEntry, storage: StorageRoot, config: RenameConfig) -> bool:
    """Realize one planned entry in storage.

    Args:
        item: A PENDING planned entry.
        storage: The root the entry was scanned from.
        config: The configuration the plan was built with.

    Returns:
        False when nothing had to be done (same name, no resize), else True.

    Raises:
        DecodeError: The source could not be decoded for resizing.
        EncodeError: The resized output could not be encoded.
        WriteError: A storage read, write, rename or delete failed, or the
            target already exists outside the plan and overwrite is off.
    """
    if item.is_unchanged and not config.enable_resize:
        return False

    original = item.entry.path
    target = final_name(item, config)
    handle = _handle_for(item, storage)

    try:
        if (
            not config.overwrite
            and target != original
            and storage.exists(target)
            and not storage.samefile(target, original)
        ):
            raise WriteError(f"Target already exists: {target}")

        if handle.supports_move and not config.enable_resize and not config.keep_originals:
            handle.move(target)
            return True

        data = handle.read_bytes()
    except (OSError, ValueError) as e:
        raise WriteError(f"Could not access {original} for {target}: {e}") from e

    if config.enable_resize:
        data = _transform(data, item, config)

    try:
        with storage.open_writer(target, like=original) as writer:
            writer.write(data)
            writer.commit()
    except (OSError, ValueError) as e:
        raise WriteError(f"Could not write {target}: {e}") from e

    if not config.keep_originals and target != original:
        try:
            if not storage.samefile(target, original):
                storage.remove(original)
        except OSError as e:
            raise WriteError(
                f"Wrote {target} but could not remove original {original}: {e}"
            ) from e
    return True


def apply_plan(
    plan: RenamePlan,
    storage: StorageRoot,
    *,
    progress_callback: Optional[ProgressCallback] = None,
) -> ApplyResult:
    """Apply a rename plan sequentially, continuing past failed entries.

    Args:
        plan: The plan to execute; its config drives every option.
        storage: Root the plan's entries live in.
        progress_callback: Called after each entry with the fraction of
            entries processed so far and the entry itself.

    Returns:
        ApplyResult: Counts and failures. With ``dry_run`` set nothing is
        touched and statuses are left as planned.
    """
    config = plan.config
    if config.dry_run:
        logger.info("Dry run: %d planned entries, no changes made", len(plan.items))
        return ApplyResult(success=True, dry_run=True)

    start = time_mod.time()
    result = ApplyResult(success=True)
    total = len(plan.items)
    for index, item in enumerate(plan.items, start=1):
        if item.status != FileStatus.PENDING:
            # Planning errors and outcomes of an earlier run need a new plan.
            result.skipped += 1
        else:
            try:
                changed = apply_entry(item, storage, config)
            except EntryError as e:
                item.status = FileStatus.ERROR
                item.error_message = f"{e.stage.capitalize()} failed: {e}"
                result.failed += 1
                result.failures.append(item)
                logger.error("Failed %s: %s", item.entry.path, item.error_message)
            else:
                item.status = FileStatus.SUCCESS
                if changed:
                    result.renamed += 1
                    logger.info("Renamed %s -> %s", item.entry.path, final_name(item, config))
                else:
                    result.unchanged += 1
        if progress_callback:
            progress_callback(index / total, item)

    result.duration = time_mod.time() - start
    result.success = result.failed == 0
    return result


__all__ = ["apply_plan", "apply_entry", "final_name", "ApplyResult", "RESIZED_MARKER"]
