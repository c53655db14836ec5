"""Public SDK surface for booklake.

This module provides a stable import path for SDK users.
It re-exports the primary client, adapters, and typed models.
"""

from __future__ import annotations

from core.config import BooklakeConfig
from core.types import CommitReceipt, IngestOutcome, SplitDocument
from ingest.fetcher import ArchiveFetcher
from ingest.pipeline import IngestionService
from ingest.splitter import split_document
from store.booklake_client import BooklakeClient
from store.datalake_port import DatalakeStorage
from store.local_datalake import LocalDatalakeStorage
from store.s3_datalake import S3DatalakeStorage

__all__ = [
    "ArchiveFetcher",
    "BooklakeClient",
    "BooklakeConfig",
    "CommitReceipt",
    "DatalakeStorage",
    "IngestOutcome",
    "IngestionService",
    "LocalDatalakeStorage",
    "S3DatalakeStorage",
    "SplitDocument",
    "split_document",
]
