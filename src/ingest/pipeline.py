"""Ingestion orchestration.

This module composes fetch, split, staging, and datalake commit into
single-book and random next-unseen ingestion operations. Internal
failures are logged and collapsed to booleans at this boundary.
"""

from __future__ import annotations

from datetime import datetime
import random
from typing import AbstractSet

from core.config import BooklakeConfig
from core.errors import BooklakeSplitError, BooklakeStagingError, BooklakeStoreError
from core.logging_config import get_logger
from core.types import IngestOutcome, IngestSettings, IngestStage
from ingest.fetcher import ArchiveFetcher
from ingest.splitter import split_document_or_raise
from ingest.staging import StagingArea
from store.datalake_port import DatalakeStorage

_LOGGER = get_logger(__name__)


def build_ingest_settings(config: BooklakeConfig) -> IngestSettings:
    """Resolve orchestrator settings from runtime config."""
    return IngestSettings(
        staging_dir=config.staging_dir,
        total_books=config.total_books,
        max_attempts=config.max_retries,
    )


class IngestionService:
    """Orchestrates archive-to-datalake ingestion for book ids."""

    def __init__(
        self,
        storage: DatalakeStorage,
        settings: IngestSettings,
        fetcher: ArchiveFetcher,
        rng: random.Random | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._fetcher = fetcher
        self._staging = StagingArea(settings.staging_dir)
        self._rng = rng or random.Random()

    @classmethod
    def from_config(
        cls,
        config: BooklakeConfig,
        storage: DatalakeStorage,
        fetcher: ArchiveFetcher | None = None,
    ) -> "IngestionService":
        """Create a service wired from runtime config.

        Args:
            config: Runtime configuration.
            storage: Datalake adapter.
            fetcher: Optional fetcher override.

        Returns:
            Configured ingestion service.
        """
        return cls(
            storage=storage,
            settings=build_ingest_settings(config),
            fetcher=fetcher or ArchiveFetcher.from_config(config),
            rng=random.Random(config.random_seed),
        )

    @property
    def staging(self) -> StagingArea:
        return self._staging

    @property
    def backend_name(self) -> str:
        return self._storage.backend_name

    def download_to_staging(self, book_id: int) -> bool:
        """Fetch, split, and stage one book; True only if all steps succeed."""
        return self._download(book_id) == "staged"

    def commit_to_datalake(self, book_id: int, timestamp: datetime) -> bool:
        """Move the staged pair into the datalake partition for ``timestamp``.

        Args:
            book_id: Book identifier.
            timestamp: Commit timestamp.

        Returns:
            True when the storage adapter persisted the pair.
        """
        try:
            self._storage.save_book(book_id, self._staging.staging_dir, timestamp)
        except (BooklakeStoreError, OSError) as error:
            _LOGGER.error("book_commit_failed", book_id=book_id, reason=str(error))
            return False
        _LOGGER.info(
            "book_committed",
            book_id=book_id,
            path=self._storage.relative_path_for(book_id, timestamp),
        )
        return True

    def ingest_one(self, book_id: int, timestamp: datetime) -> bool:
        return self.ingest_one_detailed(book_id, timestamp).succeeded

    def ingest_one_detailed(self, book_id: int, timestamp: datetime) -> IngestOutcome:
        """Run download then commit, reporting the last stage reached.

        Args:
            book_id: Book identifier.
            timestamp: Commit timestamp.

        Returns:
            Outcome whose stage tells download failures from commit failures.
        """
        stage = self._download(book_id)
        if stage != "staged":
            return IngestOutcome(book_id=book_id, stage=stage, failed=True)
        if not self.commit_to_datalake(book_id, timestamp):
            return IngestOutcome(book_id=book_id, stage="staged", failed=True)
        return IngestOutcome(book_id=book_id, stage="committed", failed=False)

    def ingest_next_unseen(
        self,
        excluded_ids: AbstractSet[int],
        timestamp: datetime,
        max_attempts: int | None = None,
    ) -> bool:
        return self.ingest_next_unseen_detailed(excluded_ids, timestamp, max_attempts) is not None

    def ingest_next_unseen_detailed(
        self,
        excluded_ids: AbstractSet[int],
        timestamp: datetime,
        max_attempts: int | None = None,
    ) -> int | None:
        """Ingest a random id not in ``excluded_ids``.

        Each draw, skipped or not, consumes one attempt. Sampling is
        best-effort and may miss unseen ids that still exist.

        Args:
            excluded_ids: Ids that must not be ingested.
            timestamp: Commit timestamp.
            max_attempts: Draw budget, defaulting to the configured retries.

        Returns:
            The ingested id, or None when every attempt failed.
        """
        attempts = self._settings.max_attempts if max_attempts is None else max_attempts
        upper_bound = max(1, self._settings.total_books)
        for attempt in range(1, attempts + 1):
            candidate = self._rng.randint(1, upper_bound)
            if candidate in excluded_ids:
                _LOGGER.debug("random_draw_excluded", book_id=candidate, attempt=attempt)
                continue
            if self.ingest_one(candidate, timestamp):
                return candidate
        _LOGGER.warning("random_ingest_exhausted", attempts=attempts)
        return None

    def exists_in_datalake(self, book_id: int) -> bool:
        try:
            return self._storage.exists(book_id)
        except BooklakeStoreError as error:
            _LOGGER.warning("datalake_query_failed", operation="exists", reason=str(error))
            return False

    def list_books(self) -> list[int]:
        try:
            return self._storage.list_books()
        except BooklakeStoreError as error:
            _LOGGER.warning("datalake_query_failed", operation="list_books", reason=str(error))
            return []

    def relative_path_for(self, book_id: int, timestamp: datetime) -> str:
        return self._storage.relative_path_for(book_id, timestamp)

    def _download(self, book_id: int) -> IngestStage:
        """Run fetch, split, and stage, returning the last stage reached."""
        raw_document = self._fetcher.fetch(book_id)
        if raw_document is None:
            return "not_started"
        try:
            document = split_document_or_raise(raw_document.text)
        except BooklakeSplitError as error:
            _LOGGER.warning("book_split_failed", book_id=book_id, reason=str(error))
            return "fetched"
        try:
            self._staging.stage(book_id, document)
        except BooklakeStagingError as error:
            _LOGGER.error("book_staging_failed", book_id=book_id, reason=str(error))
            return "split"
        _LOGGER.info("book_staged", book_id=book_id, staging_dir=str(self._staging.staging_dir))
        return "staged"
