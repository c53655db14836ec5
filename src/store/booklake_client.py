"""Python SDK for datalake ingestion.

This module exposes high-level APIs for ingesting books, querying the
datalake, and inspecting the staging area.
"""

from __future__ import annotations

from datetime import datetime

from core.config import BooklakeConfig
from core.partitioning import partition_for
from core.types import CommitReceipt, IngestOutcome
from ingest.fetcher import ArchiveFetcher
from ingest.pipeline import IngestionService
from store.datalake_port import DatalakeStorage
from store.storage_factory import create_datalake_storage


class BooklakeClient:
    """Primary SDK entry point for ingestion workflows."""

    def __init__(
        self,
        config: BooklakeConfig | None = None,
        storage: DatalakeStorage | None = None,
        fetcher: ArchiveFetcher | None = None,
        service: IngestionService | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            storage: Optional datalake adapter, built from config when absent.
            fetcher: Optional archive fetcher, built from config when absent.
            service: Optional prebuilt ingestion service; overrides storage/fetcher.
        """
        self._config = config or BooklakeConfig.from_env()
        if service is None:
            resolved_storage = storage or create_datalake_storage(self._config)
            service = IngestionService.from_config(self._config, resolved_storage, fetcher)
        self._service = service

    @property
    def config(self) -> BooklakeConfig:
        return self._config

    @property
    def service(self) -> IngestionService:
        return self._service

    @property
    def backend_name(self) -> str:
        return self._service.backend_name

    def ingest(self, book_id: int, timestamp: datetime | None = None) -> IngestOutcome:
        """Download one book and commit it to the datalake.

        Args:
            book_id: Book identifier.
            timestamp: Commit timestamp, defaulting to local now.

        Returns:
            Outcome with the last stage reached.
        """
        return self._service.ingest_one_detailed(book_id, timestamp or datetime.now())

    def ingest_random(
        self,
        exclude_existing: bool = True,
        max_attempts: int | None = None,
        timestamp: datetime | None = None,
    ) -> int | None:
        """Ingest a random book not yet in the datalake.

        Args:
            exclude_existing: Skip ids already listed in the datalake.
            max_attempts: Optional draw budget override.
            timestamp: Commit timestamp, defaulting to local now.

        Returns:
            Ingested id, or None when no attempt succeeded.
        """
        excluded_ids = set(self._service.list_books()) if exclude_existing else set()
        return self._service.ingest_next_unseen_detailed(
            excluded_ids, timestamp or datetime.now(), max_attempts
        )

    def receipt_for(self, book_id: int, timestamp: datetime) -> CommitReceipt:
        """Build the reporting payload for a committed book."""
        partition = partition_for(timestamp)
        return CommitReceipt(
            book_id=book_id,
            date=partition.date,
            hour=partition.hour,
            path=self._service.relative_path_for(book_id, timestamp),
        )

    def exists(self, book_id: int) -> bool:
        return self._service.exists_in_datalake(book_id)

    def list_books(self) -> list[int]:
        return self._service.list_books()

    def pending_books(self) -> list[int]:
        """Return ids staged locally but not yet committed."""
        return self._service.staging.pending_ids()
