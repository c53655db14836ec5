"""Unit tests for the staging area."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import BooklakeStagingError
from core.types import SplitDocument
from ingest.staging import StagingArea


def test_stage_creates_directory_and_pair(tmp_path: Path) -> None:
    """Staging should create the directory and both final files."""
    staging = StagingArea(tmp_path / "nested" / "staging")

    pair = staging.stage(42, SplitDocument(header="front", body="story"))

    assert pair.header_path.name == "42_header.txt"
    assert pair.body_path.name == "42_body.txt"
    assert pair.header_path.read_text(encoding="utf-8") == "front"
    assert pair.body_path.read_text(encoding="utf-8") == "story"


def test_stage_leaves_no_temporary_files(tmp_path: Path) -> None:
    """Only final names should remain after a successful stage."""
    staging = StagingArea(tmp_path)

    staging.stage(7, SplitDocument(header="h", body="b"))

    assert sorted(path.name for path in tmp_path.iterdir()) == ["7_body.txt", "7_header.txt"]


def test_stage_overwrites_existing_pair(tmp_path: Path) -> None:
    """Restaging the same id should replace previous content."""
    staging = StagingArea(tmp_path)
    staging.stage(7, SplitDocument(header="old", body="old body"))

    pair = staging.stage(7, SplitDocument(header="new", body="new body"))

    assert pair.body_path.read_text(encoding="utf-8") == "new body"


def test_stage_keeps_previous_pair_when_body_write_fails(tmp_path: Path) -> None:
    """A failed body write must not publish a new header over the old pair."""
    staging = StagingArea(tmp_path)
    pair = staging.stage(9, SplitDocument(header="old header", body="old body"))
    (tmp_path / "9_body.txt.tmp").mkdir()

    with pytest.raises(BooklakeStagingError):
        staging.stage(9, SplitDocument(header="new header", body="new body"))

    assert pair.header_path.read_text(encoding="utf-8") == "old header"
    assert pair.body_path.read_text(encoding="utf-8") == "old body"


def test_stage_raises_when_directory_is_a_file(tmp_path: Path) -> None:
    """I/O failures should surface as staging errors without final files."""
    blocker = tmp_path / "staging"
    blocker.write_text("not a directory", encoding="utf-8")
    staging = StagingArea(blocker)

    with pytest.raises(BooklakeStagingError):
        staging.stage(3, SplitDocument(header="h", body="b"))

    assert blocker.is_file()


def test_pending_ids_lists_complete_pairs_only(tmp_path: Path) -> None:
    """Pending ids should require both header and body."""
    staging = StagingArea(tmp_path)
    staging.stage(12, SplitDocument(header="h", body="b"))
    staging.stage(3, SplitDocument(header="h", body="b"))
    (tmp_path / "99_body.txt").write_text("orphan", encoding="utf-8")
    (tmp_path / "5_body.txt.tmp").write_text("partial", encoding="utf-8")

    assert staging.pending_ids() == [3, 12]


def test_pending_ids_is_empty_without_directory(tmp_path: Path) -> None:
    """A missing staging directory has nothing pending."""
    assert StagingArea(tmp_path / "missing").pending_ids() == []
