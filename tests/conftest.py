"""Shared fixtures for the photonrename test suite.

- MemoryStorage: an in-memory StorageRoot that records every call, so tests
  can assert exactly which storage operations the executor performed.
- make_image: encode small Pillow images of a given size and format.
"""

import io
from datetime import datetime, timezone
from types import TracebackType
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Type

import pytest
from PIL import Image

from photonrename.fs.storage import ChildInfo, ChildStat

FIXED_MTIME = datetime(2024, 3, 15, 12, 30, tzinfo=timezone.utc)


class MemoryWriter:
    """Buffered writer that only publishes its bytes on commit."""

    def __init__(self, storage: "MemoryStorage", name: str) -> None:
        self._storage = storage
        self._name = name
        self._chunks: List[bytes] = []

    def write(self, data: bytes) -> None:
        self._chunks.append(data)

    def commit(self) -> None:
        self._storage.calls.append(("commit", self._name))
        if self._name in self._storage.fail_writes:
            raise OSError(f"disk full writing {self._name}")
        self._storage.files[self._name] = b"".join(self._chunks)

    def __enter__(self) -> "MemoryWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        return None


class MemoryStorage:
    """StorageRoot over a dict of name -> bytes."""

    def __init__(
        self,
        files: Optional[Dict[str, bytes]] = None,
        *,
        atomic: bool = False,
        dirs: Iterable[str] = (),
    ) -> None:
        self.files: Dict[str, bytes] = dict(files or {})
        self.dirs: List[str] = list(dirs)
        self.supports_atomic_rename = atomic
        self.calls: List[Tuple[str, ...]] = []
        self.fail_writes: Set[str] = set()
        self.fail_removes: Set[str] = set()
        self.fail_listing = False

    def _require(self, name: str) -> bytes:
        if name not in self.files:
            raise FileNotFoundError(name)
        return self.files[name]

    def list_children(self) -> Iterator[ChildInfo]:
        self.calls.append(("list",))
        if self.fail_listing:
            raise PermissionError("permission denied")
        for name in self.dirs:
            yield ChildInfo(name, "other")
        for name in list(self.files):
            yield ChildInfo(name, "file")

    def stat(self, name: str) -> ChildStat:
        return ChildStat(size=len(self._require(name)), last_modified=FIXED_MTIME)

    def exists(self, name: str) -> bool:
        self.calls.append(("exists", name))
        return name in self.files

    def samefile(self, first: str, second: str) -> bool:
        self.calls.append(("samefile", first, second))
        return first == second and first in self.files

    def read_bytes(self, name: str) -> bytes:
        self.calls.append(("read", name))
        return self._require(name)

    def open_writer(self, name: str, like: Optional[str] = None) -> MemoryWriter:
        self.calls.append(("open_writer", name))
        return MemoryWriter(self, name)

    def remove(self, name: str) -> None:
        self.calls.append(("remove", name))
        if name in self.fail_removes:
            raise PermissionError(f"cannot delete {name}")
        self._require(name)
        del self.files[name]

    def rename(self, old: str, new: str) -> None:
        self.calls.append(("rename", old, new))
        self.files[new] = self.files.pop(old)

    def mutating_calls(self) -> List[Tuple[str, ...]]:
        """Calls that change storage content."""
        return [c for c in self.calls if c[0] in {"commit", "remove", "rename"}]


@pytest.fixture
def memory_storage() -> Callable[..., MemoryStorage]:
    """Factory for MemoryStorage instances."""
    return MemoryStorage


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Return a factory encoding a solid-colour image as bytes."""

    def _make(
        width: int, height: int, fmt: str = "JPEG", mode: str = "RGB"
    ) -> bytes:
        color = (200, 40, 40, 128) if mode == "RGBA" else (200, 40, 40)
        img = Image.new(mode, (width, height), color)
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        return buf.getvalue()

    return _make
