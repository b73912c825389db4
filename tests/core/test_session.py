"""Tests for RenameSession: replanning, deferral during execution, re-entrancy."""

from pathlib import Path

import pytest

from photonrename.core.errors import PhotonRenameError, ScanCancelled, SessionBusyError
from photonrename.core.session import RenameSession
from photonrename.models.config import RenameConfig
from photonrename.models.core import FileStatus
from photonrename.models.plan import PlannedEntry


def _session(memory_storage, names, **config) -> RenameSession:
    storage = memory_storage({name: name.encode() for name in names})
    session = RenameSession(config=RenameConfig(**config))
    session.scan(storage)
    return session


def test_scan_plans_immediately(memory_storage) -> None:
    session = _session(memory_storage, ["b.jpg", "a.jpg"], pattern="x_{num}")

    assert [i.target_name for i in session.plan.items] == ["x_1.jpg", "x_2.jpg"]
    assert [e.path for e in session.entries] == ["a.jpg", "b.jpg"]


def test_set_config_replans(memory_storage) -> None:
    session = _session(memory_storage, ["a.jpg", "b.jpg"], pattern="x_{num}")

    session.set_config(RenameConfig(pattern="same"))

    assert [i.status for i in session.plan.items] == [
        FileStatus.PENDING,
        FileStatus.ERROR,
    ]


def test_cancelled_scan_keeps_previous_state(memory_storage) -> None:
    session = _session(memory_storage, ["a.jpg"])
    storage = session.storage
    plan = session.plan

    def picker():
        raise ScanCancelled()

    result = session.scan(picker)

    assert result.cancelled
    assert session.storage is storage
    assert session.plan is plan


def test_changes_during_execution_are_deferred(memory_storage) -> None:
    session = _session(memory_storage, ["a.jpg", "b.jpg", "c.jpg"], pattern="run_{num}")
    observed = []

    def on_progress(fraction: float, item: PlannedEntry) -> None:
        if fraction < 1.0:
            # Mid-run edit: must not renumber the batch in flight.
            session.set_config(RenameConfig(pattern="later_{num}"))
        observed.append(item.new_name)

    result = session.execute(progress_callback=on_progress)

    assert observed == ["run_1", "run_2", "run_3"]
    assert result.renamed == 3
    assert sorted(session.storage.files) == ["run_1.jpg", "run_2.jpg", "run_3.jpg"]
    # The deferred config is applied once the run finishes.
    assert session.config.pattern == "later_{num}"
    assert not session.has_deferred_changes
    assert session.plan.items[0].new_name == "later_1"
    assert not session.executing


def test_deferred_entries_applied_after_run(memory_storage) -> None:
    session = _session(memory_storage, ["a.jpg", "b.jpg"], pattern="n_{num}")
    first_entry = session.entries[0]

    def on_progress(fraction: float, item: PlannedEntry) -> None:
        session.set_entries([first_entry])

    session.execute(progress_callback=on_progress)

    assert session.entries == [first_entry]
    assert len(session.plan.items) == 1


def test_execute_is_not_reentrant(memory_storage) -> None:
    session = _session(memory_storage, ["a.jpg"], pattern="z")
    raised = []

    def on_progress(fraction: float, item: PlannedEntry) -> None:
        with pytest.raises(SessionBusyError):
            session.execute()
        raised.append(True)

    session.execute(progress_callback=on_progress)

    assert raised == [True]


def test_execute_without_storage() -> None:
    session = RenameSession()
    with pytest.raises(PhotonRenameError):
        session.execute()


def test_dry_run_without_storage_is_allowed() -> None:
    session = RenameSession(config=RenameConfig(dry_run=True))

    result = session.execute()

    assert result.dry_run


def test_scan_local_path(tmp_path: Path) -> None:
    (tmp_path / "one.png").write_bytes(b"1")
    session = RenameSession()

    result = session.scan(tmp_path)

    assert len(result.files) == 1
    assert session.plan.root_dir == tmp_path.absolute()
