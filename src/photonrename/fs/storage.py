"""Storage collaborator for photonrename.

This module defines the interface the scanner and executor use to reach the
files of one folder, and its local-filesystem implementation.
- Only direct children of the root are visible; names are plain file names,
  never paths.
- Writes are staged in a temporary sibling file and only replace the target on
  an explicit commit, so an interrupted write never truncates existing data.
- The atomic rename fast path is a probed capability
  (``supports_atomic_rename``), never assumed.

Design:
- StorageRoot is a typing.Protocol so tests (and other backends) can supply
  their own in-memory implementation without subclassing.
- StorageHandle is the opaque per-entry reference stored on ImageEntry. Only
  the executor dereferences it.
"""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from types import TracebackType
from typing import IO, Iterator, NamedTuple, Optional, Protocol, Type, runtime_checkable

from photonrename.fs.operations import atomic_rename

logger = logging.getLogger(__name__)

_TEMP_PREFIX = ".photonrename-"


class ChildInfo(NamedTuple):
    """A direct child of a storage root."""

    name: str
    kind: str  # "file" or "other"


class ChildStat(NamedTuple):
    """Metadata read from a stored file."""

    size: int
    last_modified: datetime


class StorageWriter(Protocol):
    """Create-or-truncate writer with explicit commit."""

    def write(self, data: bytes) -> None: ...

    def commit(self) -> None: ...

    def __enter__(self) -> "StorageWriter": ...

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> Optional[bool]: ...


@runtime_checkable
class StorageRoot(Protocol):
    """Read/write/list/remove interface over one folder."""

    @property
    def supports_atomic_rename(self) -> bool: ...

    def list_children(self) -> Iterator[ChildInfo]: ...

    def stat(self, name: str) -> ChildStat: ...

    def exists(self, name: str) -> bool: ...

    def samefile(self, first: str, second: str) -> bool: ...

    def read_bytes(self, name: str) -> bytes: ...

    def open_writer(self, name: str, like: Optional[str] = None) -> StorageWriter: ...

    def remove(self, name: str) -> None: ...

    def rename(self, old: str, new: str) -> None: ...


@dataclass(frozen=True)
class StorageHandle:
    """Opaque reference to one stored file, resolved lazily."""

    root: StorageRoot
    name: str

    def read_bytes(self) -> bytes:
        """Read the current content of the referenced file."""
        return self.root.read_bytes(self.name)

    @property
    def supports_move(self) -> bool:
        """Whether the backing root can rename in a single atomic step."""
        return self.root.supports_atomic_rename

    def move(self, new_name: str) -> None:
        """Rename the referenced file in place."""
        self.root.rename(self.name, new_name)


def _default_file_mode() -> int:
    # umask can only be read by setting it.
    mask = os.umask(0)
    os.umask(mask)
    return 0o666 & ~mask


class LocalStorageWriter:
    """Stage bytes in a temporary sibling file; replace the target on commit.

    ``mkstemp`` creates the staging file owner-only, so on commit it gets the
    permission bits of *like* (when given and present), else those of the
    target it replaces, else the umask default for a new file.
    """

    def __init__(self, directory: Path, name: str, like: Optional[Path] = None) -> None:
        self._target = directory / name
        self._like = like
        fd, tmp_name = tempfile.mkstemp(prefix=_TEMP_PREFIX, dir=directory)
        self._tmp_path = Path(tmp_name)
        self._file: IO[bytes] = os.fdopen(fd, "wb")
        self._committed = False

    def write(self, data: bytes) -> None:
        self._file.write(data)

    def _final_mode(self) -> int:
        for candidate in (self._like, self._target):
            if candidate is None:
                continue
            try:
                return stat.S_IMODE(candidate.stat().st_mode)
            except FileNotFoundError:
                continue
        return _default_file_mode()

    def commit(self) -> None:
        """Flush the staged bytes and atomically move them over the target."""
        self._file.flush()
        os.fsync(self._file.fileno())
        self._file.close()
        os.chmod(self._tmp_path, self._final_mode())
        os.replace(self._tmp_path, self._target)
        self._committed = True
        logger.debug("committed %s", self._target)

    def __enter__(self) -> "LocalStorageWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> Optional[bool]:
        if not self._committed:
            self._file.close()
            self._tmp_path.unlink(missing_ok=True)
        return None


class LocalStorageRoot:
    """StorageRoot over a local directory."""

    supports_atomic_rename = True

    def __init__(self, path: Path) -> None:
        self.path = Path(path).absolute()

    def __repr__(self) -> str:
        return f"LocalStorageRoot({str(self.path)!r})"

    def _child(self, name: str) -> Path:
        # Names are plain file names; refuse anything that would escape the root.
        if not name or Path(name).name != name:
            raise ValueError(f"Invalid child name: {name!r}")
        return self.path / name

    def list_children(self) -> Iterator[ChildInfo]:
        """Yield the direct children of the root.

        Raises:
            FileNotFoundError: If the root does not exist.
            NotADirectoryError: If the root is not a directory.
            PermissionError: If the root cannot be listed.
        """
        with os.scandir(self.path) as it:
            for item in it:
                if item.name.startswith(_TEMP_PREFIX):
                    continue
                kind = "file" if item.is_file() else "other"
                yield ChildInfo(item.name, kind)

    def stat(self, name: str) -> ChildStat:
        st = self._child(name).stat()
        return ChildStat(
            size=st.st_size,
            last_modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def exists(self, name: str) -> bool:
        return self._child(name).exists()

    def samefile(self, first: str, second: str) -> bool:
        """Whether two names resolve to the same file (e.g. case-only aliases)."""
        try:
            return self._child(first).samefile(self._child(second))
        except OSError:
            return False

    def read_bytes(self, name: str) -> bytes:
        return self._child(name).read_bytes()

    def open_writer(self, name: str, like: Optional[str] = None) -> LocalStorageWriter:
        """Open a staged writer for *name*, taking permissions from child *like*."""
        source = self._child(like) if like is not None else None
        return LocalStorageWriter(self.path, self._child(name).name, source)

    def remove(self, name: str) -> None:
        self._child(name).unlink()
        logger.debug("removed %s", name)

    def rename(self, old: str, new: str) -> None:
        atomic_rename(self._child(old), self._child(new), overwrite=True)

    def handle(self, name: str) -> StorageHandle:
        """Return the opaque handle for child *name*."""
        return StorageHandle(self, name)

    def uri(self, name: str) -> str:
        """Return a file:// URI for child *name* (used as a preview handle)."""
        return self._child(name).as_uri()
