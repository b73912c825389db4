"""Tests for the rename planner.

This test suite covers:
- Sequence numbering by position, independent of conflicts
- Case-insensitive conflict detection on the full target name
- The overwrite switch and the fold over previously seen names
- Purity: identical input yields identical output, nothing is mutated
"""

from datetime import datetime, timezone
from typing import List

from photonrename.core.planner import (
    CONFLICT_MESSAGE,
    create_rename_plan,
    generate_preview,
)
from photonrename.models.config import RenameConfig
from photonrename.models.core import FileStatus, ImageEntry

MTIME = datetime(2024, 1, 2, tzinfo=timezone.utc)


def _entries(*names: str) -> List[ImageEntry]:
    result = []
    for full in names:
        stem, ext = full.rsplit(".", 1)
        result.append(
            ImageEntry(
                original_name=stem,
                extension=f".{ext.lower()}",
                path=full,
                size=1,
                last_modified=MTIME,
            )
        )
    return result


def test_numbering_is_start_plus_index() -> None:
    entries = _entries("c.jpg", "a.jpg", "b.jpg")
    config = RenameConfig(pattern="trip_{num:002}", start_number=10)

    items = generate_preview(entries, config)

    assert [i.new_name for i in items] == ["trip_10", "trip_11", "trip_12"]
    assert [i.entry.path for i in items] == ["c.jpg", "a.jpg", "b.jpg"]
    assert all(i.status == FileStatus.PENDING for i in items)


def test_constant_pattern_conflicts_after_first() -> None:
    entries = _entries("a.jpg", "b.jpg", "c.jpg")

    items = generate_preview(entries, RenameConfig(pattern="img"))

    assert [i.status for i in items] == [
        FileStatus.PENDING,
        FileStatus.ERROR,
        FileStatus.ERROR,
    ]
    assert items[0].error_message is None
    assert items[1].error_message == CONFLICT_MESSAGE
    assert items[2].error_message == CONFLICT_MESSAGE


def test_overwrite_disables_conflicts() -> None:
    entries = _entries("a.jpg", "b.jpg")

    items = generate_preview(entries, RenameConfig(pattern="img", overwrite=True))

    assert [i.status for i in items] == [FileStatus.PENDING, FileStatus.PENDING]


def test_conflict_check_is_case_insensitive() -> None:
    """'Beach.jpg' and 'beach.jpg' are the same target on a case-insensitive disk."""
    entries = _entries("Beach.jpg", "beach.jpg")

    first, second = generate_preview(entries, RenameConfig(pattern="{name}"))

    assert first.status == FileStatus.PENDING
    assert second.status == FileStatus.ERROR


def test_different_extensions_do_not_conflict() -> None:
    entries = _entries("sunset.jpg", "sunset.png")

    items = generate_preview(entries, RenameConfig(pattern="{name}"))

    assert [i.target_name for i in items] == ["sunset.jpg", "sunset.png"]
    assert all(i.status == FileStatus.PENDING for i in items)


def test_conflicting_entries_still_consume_numbers() -> None:
    entries = _entries("a.jpg", "b.jpg", "c.jpg")
    config = RenameConfig(pattern="{num}", prefix="x", start_number=1)

    items = generate_preview(entries, config)

    assert [i.new_name for i in items] == ["x1", "x2", "x3"]


def test_every_seen_name_blocks_later_duplicates() -> None:
    """An entry that collides still registers its name for later entries."""
    entries = _entries("a.jpg", "b.jpg", "c.jpg", "d.jpg")
    # Targets: dup, dup, other, dup
    config = RenameConfig(pattern="{name}")
    items = generate_preview(
        [
            entries[0].model_copy(update={"original_name": "dup"}),
            entries[1].model_copy(update={"original_name": "dup"}),
            entries[2].model_copy(update={"original_name": "other"}),
            entries[3].model_copy(update={"original_name": "DUP"}),
        ],
        config,
    )

    assert [i.status for i in items] == [
        FileStatus.PENDING,
        FileStatus.ERROR,
        FileStatus.PENDING,
        FileStatus.ERROR,
    ]


def test_unchanged_name_is_pending() -> None:
    items = generate_preview(_entries("keep.jpg"), RenameConfig(pattern="{name}"))

    assert items[0].status == FileStatus.PENDING
    assert items[0].is_unchanged


def test_empty_input() -> None:
    assert generate_preview([], RenameConfig()) == []


def test_default_pattern() -> None:
    items = generate_preview(_entries("holiday.jpg", "party.png"), RenameConfig())

    assert [i.target_name for i in items] == ["holiday_001.jpg", "party_002.png"]


def test_planning_is_deterministic_and_pure() -> None:
    entries = _entries("a.jpg", "b.jpg", "c.jpg")
    config = RenameConfig(pattern="img_{date}")
    snapshot = [e.model_dump() for e in entries]

    first = generate_preview(entries, config)
    second = generate_preview(entries, config)

    assert [(i.new_name, i.status, i.error_message) for i in first] == [
        (i.new_name, i.status, i.error_message) for i in second
    ]
    assert first[0] is not second[0]
    assert [e.model_dump() for e in entries] == snapshot


def test_create_rename_plan_carries_config() -> None:
    config = RenameConfig(pattern="img", dry_run=True)

    plan = create_rename_plan(_entries("a.jpg", "b.jpg"), config, plan_id="fixed")

    assert plan.id == "fixed"
    assert plan.config is config
    assert len(plan.items) == 2
    assert len(plan.conflicts) == 1
