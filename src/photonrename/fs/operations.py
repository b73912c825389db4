"""Low-level rename primitive behind the local storage root.

``atomic_rename`` moves one file to a new name with ``os.replace``. When the
two paths sit on different devices it falls back to copy-then-unlink, and on
Windows it adds the ``\\\\?\\`` prefix to paths longer than MAX_PATH.
"""

import errno
import logging
import os
import shutil
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

WIN_MAX_PATH = 259  # longest path Win32 accepts without the long-path prefix


def get_win_long_path_prefix() -> str:
    """Return the ``\\\\?\\`` prefix that lifts the Windows MAX_PATH limit."""
    return "\\\\?\\"


def _win_long_path(path: Path) -> str:
    text = str(path)
    if sys.platform != "win32" or len(text) <= WIN_MAX_PATH:
        return text
    prefix = get_win_long_path_prefix()
    return text if text.startswith(prefix) else prefix + text


def _same_file(src: Path, dst: Path) -> bool:
    # 'a.jpg' and 'A.jpg' name one file on a case-insensitive volume.
    try:
        return src.samefile(dst)
    except OSError:
        return False


def atomic_rename(src: Path, dst: Path, *, overwrite: bool = False) -> None:
    """Give *src* the name *dst* in one step.

    Args:
        src: Existing file.
        dst: New path, normally in the same directory.
        overwrite: Replace an existing *dst* instead of refusing.

    Raises:
        FileNotFoundError: *src* does not exist.
        FileExistsError: *dst* exists, is another file, and *overwrite* is off.
        OSError: The rename (or the cross-device copy) failed.
    """
    if not src.exists():
        raise FileNotFoundError(f"Source {src} does not exist.")
    if not overwrite and dst.exists() and not _same_file(src, dst):
        raise FileExistsError(f"Destination {dst} already exists.")

    old, new = _win_long_path(src), _win_long_path(dst)
    logger.debug("rename %s -> %s", src, dst)
    try:
        os.replace(old, new)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.debug("cross-device rename, copying %s", src)
        shutil.copy2(old, new)
        os.unlink(old)
