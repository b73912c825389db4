"""Interactive rename session.

Ties scanner, planner and executor together for a front end that lets the user
edit options and preview the plan repeatedly before running it.

While an execution is in flight, config or entry changes are deferred: the
running batch keeps the numbering and conflict set it started with, and the
latest deferred change is planned once the run finishes.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from photonrename.core.apply import ApplyResult, ProgressCallback, apply_plan
from photonrename.core.errors import PhotonRenameError, ScanCancelled, SessionBusyError
from photonrename.core.planner import create_rename_plan
from photonrename.core.scanner import RootPicker, resolve_root, scan_directory
from photonrename.fs.storage import StorageRoot
from photonrename.models.config import RenameConfig
from photonrename.models.core import ImageEntry, ScanResult
from photonrename.models.plan import RenamePlan
from photonrename.models.scan import ScanOptions

logger = logging.getLogger(__name__)


class RenameSession:
    """Holds the scanned entries, the current config and the current plan."""

    def __init__(
        self,
        config: Optional[RenameConfig] = None,
        entries: Sequence[ImageEntry] = (),
        storage: Optional[StorageRoot] = None,
    ) -> None:
        self.config = config or RenameConfig()
        self.entries: List[ImageEntry] = list(entries)
        self.storage = storage
        self.executing = False
        self._deferred_config: Optional[RenameConfig] = None
        self._deferred_entries: Optional[List[ImageEntry]] = None
        self.plan = self._make_plan()

    def _make_plan(self) -> RenamePlan:
        return create_rename_plan(
            self.entries, self.config, root_dir=getattr(self.storage, "path", None)
        )

    def scan(
        self,
        root: Union[Path, str, StorageRoot, RootPicker],
        options: Optional[ScanOptions] = None,
    ) -> ScanResult:
        """Scan *root* and replace the session's entries with the result.

        A cancelled pick leaves the current entries and storage untouched.
        """
        try:
            storage = resolve_root(root)
        except ScanCancelled:
            logger.info("Scan cancelled by user")
            return ScanResult(cancelled=True)
        result = scan_directory(storage, options)
        self.storage = storage
        self.set_entries(result.files)
        return result

    def set_config(self, config: RenameConfig) -> None:
        """Replace the config, replanning now or after the running batch."""
        if self.executing:
            logger.debug("Execution in progress; deferring config change")
            self._deferred_config = config
            return
        self.config = config
        self.plan = self._make_plan()

    def set_entries(self, entries: Sequence[ImageEntry]) -> None:
        """Replace the entries, replanning now or after the running batch."""
        if self.executing:
            logger.debug("Execution in progress; deferring entry change")
            self._deferred_entries = list(entries)
            return
        self.entries = list(entries)
        self.plan = self._make_plan()

    @property
    def has_deferred_changes(self) -> bool:
        return self._deferred_config is not None or self._deferred_entries is not None

    def _apply_deferred(self) -> None:
        if not self.has_deferred_changes:
            return
        if self._deferred_config is not None:
            self.config = self._deferred_config
        if self._deferred_entries is not None:
            self.entries = self._deferred_entries
        self._deferred_config = None
        self._deferred_entries = None
        self.plan = self._make_plan()

    def execute(self, progress_callback: Optional[ProgressCallback] = None) -> ApplyResult:
        """Run the current plan.

        Raises:
            SessionBusyError: If called while a run is already in progress.
            PhotonRenameError: If no folder has been scanned and this is not a
                dry run.
        """
        if self.executing:
            raise SessionBusyError("An execution is already in progress")
        if self.storage is None and not self.plan.config.dry_run:
            raise PhotonRenameError("No folder selected; scan a folder first")
        self.executing = True
        try:
            return apply_plan(self.plan, self.storage, progress_callback=progress_callback)  # type: ignore[arg-type]
        finally:
            self.executing = False
            self._apply_deferred()
