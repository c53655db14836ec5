"""Shared typed models.

This module defines immutable data models used by ingest, store,
SDK, and HTTP layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

IngestStage = Literal["not_started", "fetched", "split", "staged", "committed"]


@dataclass(frozen=True)
class RawDocument:
    """Raw archive text for one book before splitting.

    Attributes:
        book_id: Archive identifier of the book.
        source_url: URL the text was fetched from.
        text: Full decoded response body.
    """

    book_id: int
    source_url: str
    text: str


@dataclass(frozen=True)
class SplitDocument:
    """Header and body extracted from a raw document.

    Attributes:
        header: Front matter preceding the start marker, trimmed.
        body: Text between start and end markers, trimmed.
    """

    header: str
    body: str


@dataclass(frozen=True)
class StagedArtifactPair:
    """Final staging file paths for one book.

    Attributes:
        book_id: Book identifier.
        header_path: Path of the staged header file.
        body_path: Path of the staged body file.
    """

    book_id: int
    header_path: Path
    body_path: Path


@dataclass(frozen=True)
class PartitionKey:
    """Date/hour partition derived from a commit timestamp.

    Attributes:
        date: Zero-padded ``YYYYMMDD`` string.
        hour: Zero-padded ``HH`` string, 00 to 23.
    """

    date: str
    hour: str


@dataclass(frozen=True)
class IngestSettings:
    """Orchestrator settings resolved from runtime config.

    Attributes:
        staging_dir: Directory holding staged pairs.
        total_books: Upper bound of the random sampling range.
        max_attempts: Default draw budget for next-unseen ingestion.
    """

    staging_dir: Path
    total_books: int
    max_attempts: int


@dataclass(frozen=True)
class IngestOutcome:
    """Result of a single-book ingestion attempt.

    Attributes:
        book_id: Book identifier.
        stage: Last stage reached; ``committed`` only on full success.
        failed: Whether the sequence stopped before commit.
    """

    book_id: int
    stage: IngestStage
    failed: bool

    @property
    def succeeded(self) -> bool:
        return not self.failed

    @property
    def commit_failed(self) -> bool:
        """Return whether data was staged but could not be committed."""
        return self.failed and self.stage == "staged"


@dataclass(frozen=True)
class CommitReceipt:
    """Reporting payload for a committed book.

    Attributes:
        book_id: Book identifier.
        date: Partition date string.
        hour: Partition hour string.
        path: Relative datalake path without extension.
    """

    book_id: int
    date: str
    hour: str
    path: str
