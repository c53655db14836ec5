"""Filesystem-backed datalake adapter.

This module mirrors the S3 key layout under a local root directory.
It serves development setups and tests without an object store.
"""

from __future__ import annotations

from datetime import datetime
import os
from pathlib import Path
import shutil

from core.constants import BODY_OBJECT_SUFFIX, STAGING_TEMP_SUFFIX
from core.errors import BooklakeCommitError, BooklakeQueryError
from core.logging_config import get_logger
from core.partitioning import (
    body_key,
    book_id_from_body_key,
    header_key,
    normalize_prefix,
    partition_prefix,
    relative_path,
)
from ingest.staging import staged_pair_paths

_LOGGER = get_logger(__name__)


class LocalDatalakeStorage:
    """Datalake storage rooted at a local directory."""

    backend_name = "local"

    def __init__(self, root: Path, prefix: str) -> None:
        self._root = root.expanduser().resolve()
        self._prefix = prefix

    def save_book(self, book_id: int, staging_dir: Path, timestamp: datetime) -> None:
        """Copy the staged pair into its partition, then delete it.

        Raises:
            BooklakeCommitError: If a staged file is missing or copying fails.
        """
        pair = staged_pair_paths(staging_dir, book_id)
        if not pair.body_path.is_file() or not pair.header_path.is_file():
            raise BooklakeCommitError(
                f"Missing staged files for book {book_id} at {staging_dir}. "
                "Download the book to staging before committing."
            )
        try:
            _copy_atomic(pair.body_path, self._root / body_key(self._prefix, book_id, timestamp))
            _copy_atomic(
                pair.header_path, self._root / header_key(self._prefix, book_id, timestamp)
            )
        except OSError as error:
            raise BooklakeCommitError(
                f"Failed to copy book {book_id} into {self._root}: {error}. "
                "Staged files were kept; retry the commit."
            ) from error
        pair.body_path.unlink(missing_ok=True)
        pair.header_path.unlink(missing_ok=True)
        _LOGGER.info(
            "book_uploaded",
            book_id=book_id,
            location=str(self._root / partition_prefix(self._prefix, timestamp)),
        )

    def exists(self, book_id: int) -> bool:
        return book_id in self._scan_book_ids()

    def list_books(self) -> list[int]:
        return sorted(self._scan_book_ids())

    def relative_path_for(self, book_id: int, timestamp: datetime) -> str:
        return relative_path(self._prefix, book_id, timestamp)

    def _scan_book_ids(self) -> set[int]:
        """Collect ids with a body file under any partition.

        Raises:
            BooklakeQueryError: If the directory walk fails.
        """
        search_root = self._root / normalize_prefix(self._prefix)
        if not search_root.is_dir():
            return set()
        book_ids: set[int] = set()
        try:
            for body_path in search_root.rglob(f"*{BODY_OBJECT_SUFFIX}"):
                book_id = book_id_from_body_key(body_path.name)
                if book_id is not None and body_path.is_file():
                    book_ids.add(book_id)
        except OSError as error:
            raise BooklakeQueryError(f"Error scanning {search_root}: {error}") from error
        return book_ids


def _copy_atomic(source_path: Path, target_path: Path) -> None:
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = target_path.with_name(target_path.name + STAGING_TEMP_SUFFIX)
    shutil.copyfile(source_path, temp_path)
    os.replace(temp_path, target_path)
