"""Filesystem operations for photonrename."""

from photonrename.fs.operations import atomic_rename
from photonrename.fs.storage import (
    ChildInfo,
    ChildStat,
    LocalStorageRoot,
    StorageHandle,
    StorageRoot,
    StorageWriter,
)

__all__ = [
    "atomic_rename",
    "ChildInfo",
    "ChildStat",
    "LocalStorageRoot",
    "StorageHandle",
    "StorageRoot",
    "StorageWriter",
]
