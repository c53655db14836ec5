"""Local staging area for split documents.

Both parts are written to ``.tmp`` siblings before either is renamed over
its final name. A failed write leaves the previous final pair untouched.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.constants import STAGED_BODY_SUFFIX, STAGED_HEADER_SUFFIX, STAGING_TEMP_SUFFIX
from core.errors import BooklakeStagingError
from core.types import SplitDocument, StagedArtifactPair


def staged_pair_paths(staging_dir: Path, book_id: int) -> StagedArtifactPair:
    """Return deterministic staging paths for a book id."""
    return StagedArtifactPair(
        book_id=book_id,
        header_path=staging_dir / f"{book_id}{STAGED_HEADER_SUFFIX}",
        body_path=staging_dir / f"{book_id}{STAGED_BODY_SUFFIX}",
    )


class StagingArea:
    """Filesystem-backed staging directory."""

    def __init__(self, staging_dir: Path) -> None:
        self._staging_dir = staging_dir.expanduser().resolve()

    @property
    def staging_dir(self) -> Path:
        return self._staging_dir

    def paths_for(self, book_id: int) -> StagedArtifactPair:
        return staged_pair_paths(self._staging_dir, book_id)

    def stage(self, book_id: int, document: SplitDocument) -> StagedArtifactPair:
        """Atomically write header and body files for a book.

        Args:
            book_id: Book identifier.
            document: Split header/body payload.

        Returns:
            Paths of the published pair.

        Raises:
            BooklakeStagingError: If the directory or files cannot be written.
        """
        pair = self.paths_for(book_id)
        header_temp = _temp_path_for(pair.header_path)
        body_temp = _temp_path_for(pair.body_path)
        try:
            self._staging_dir.mkdir(parents=True, exist_ok=True)
            _write_synced(header_temp, document.header)
            _write_synced(body_temp, document.body)
            os.replace(header_temp, pair.header_path)
            os.replace(body_temp, pair.body_path)
        except OSError as error:
            raise BooklakeStagingError(
                f"Failed to stage book {book_id} under {self._staging_dir}: {error}. "
                "Check free disk space and directory permissions."
            ) from error
        return pair

    def has_pair(self, book_id: int) -> bool:
        pair = self.paths_for(book_id)
        return pair.header_path.is_file() and pair.body_path.is_file()

    def pending_ids(self) -> list[int]:
        """Return sorted ids that have a complete staged pair."""
        if not self._staging_dir.is_dir():
            return []
        book_ids: set[int] = set()
        for body_path in self._staging_dir.glob(f"*{STAGED_BODY_SUFFIX}"):
            id_text = body_path.name[: -len(STAGED_BODY_SUFFIX)]
            if id_text.isascii() and id_text.isdigit() and self.has_pair(int(id_text)):
                book_ids.add(int(id_text))
        return sorted(book_ids)


def _temp_path_for(final_path: Path) -> Path:
    return final_path.with_name(final_path.name + STAGING_TEMP_SUFFIX)


def _write_synced(path: Path, text: str) -> None:
    """Write text and fsync it before returning."""
    with path.open("w", encoding="utf-8") as handle:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())
