"""Directory scanner for image files.

This module enumerates the direct children of a storage root, keeps the ones
whose extension is on the image allow-list, and returns them as immutable
ImageEntry records sorted by name.
"""

import locale
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from photonrename.core.errors import ScanAccessError, ScanCancelled
from photonrename.fs.storage import LocalStorageRoot, StorageHandle, StorageRoot
from photonrename.models.core import ImageEntry, ScanResult
from photonrename.models.scan import IMAGE_EXTENSIONS, ScanOptions

# Logger for this module
logger = logging.getLogger(__name__)

RootPicker = Callable[[], StorageRoot]


def split_extension(filename: str) -> Optional[Tuple[str, str]]:
    """Split *filename* at its last dot.

    Args:
        filename: A plain file name.

    Returns:
        ``(name, extension)`` with the extension lower-cased and dot included,
        or None when the name has no dot at all.
    """
    dot = filename.rfind(".")
    if dot == -1:
        return None
    return filename[:dot], filename[dot:].lower()


def sort_key(original_name: str) -> Tuple[str, str]:
    """Locale-aware collation key, case-insensitive first, exact name second."""
    return (locale.strxfrm(original_name.casefold()), locale.strxfrm(original_name))


def resolve_root(root: Union[Path, str, StorageRoot, RootPicker]) -> StorageRoot:
    """Turn a path, root or picker into an open StorageRoot.

    Raises:
        ScanCancelled: If a picker was aborted.
    """
    if isinstance(root, (str, Path)):
        return LocalStorageRoot(Path(root))
    if isinstance(root, StorageRoot):
        return root
    # Anything else is a picker; it may raise ScanCancelled.
    return root()


def _make_entry(storage: StorageRoot, filename: str, name: str, ext: str) -> ImageEntry:
    stat = storage.stat(filename)
    preview_url = None
    if isinstance(storage, LocalStorageRoot):
        preview_url = storage.uri(filename)
    return ImageEntry(
        original_name=name,
        extension=ext,
        path=filename,
        size=stat.size,
        last_modified=stat.last_modified,
        preview_url=preview_url,
        handle=StorageHandle(storage, filename),
    )


def scan_directory(
    root: Union[Path, str, StorageRoot, RootPicker],
    options: Optional[ScanOptions] = None,
) -> ScanResult:
    """Scan the direct children of a storage root for images.

    Args:
        root: A directory path, an already-open StorageRoot, or a zero-argument
            picker returning one (the picker may raise ScanCancelled).
        options: Scan options. Only ``target_extensions`` and ``recursive`` are
            consulted; ``recursive`` is accepted but subdirectories are never
            entered.

    Returns:
        ScanResult with entries sorted by original name. A cancelled pick
        yields an empty result with ``cancelled=True``.

    Raises:
        ScanAccessError: If the root is missing, not a directory, or cannot be
            listed.
    """
    try:
        storage = resolve_root(root)
    except ScanCancelled:
        logger.info("Scan cancelled by user")
        return ScanResult(cancelled=True)

    extensions = options.target_extensions if options else IMAGE_EXTENSIONS
    if options is not None and options.recursive:
        logger.warning("Recursive scanning is not supported; scanning top level only")

    root_dir = getattr(storage, "path", None)
    files: List[ImageEntry] = []
    errors: List[str] = []
    skipped = 0
    try:
        for child in storage.list_children():
            if child.kind != "file":
                skipped += 1
                continue
            parts = split_extension(child.name)
            if parts is None or parts[1] not in extensions:
                skipped += 1
                continue
            try:
                files.append(_make_entry(storage, child.name, *parts))
            except FileNotFoundError as e:
                # Removed between listing and stat; not an access problem.
                errors.append(f"Error accessing {child.name}: {e}")
    except OSError as e:
        raise ScanAccessError(f"Cannot access {root_dir or storage}: {e}") from e

    files.sort(key=lambda f: sort_key(f.original_name))
    logger.debug("Scanned %d images (%d skipped) in %s", len(files), skipped, root_dir)
    return ScanResult(
        files=files,
        root_dir=root_dir,
        skipped_files=skipped,
        errors=errors,
    )
