"""Unit tests for the SDK client."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from core.config import BooklakeConfig
from ingest.fetcher import ArchiveFetcher
from store.booklake_client import BooklakeClient
from tests.fakes import archive_session

_TEXT = (
    "meta\n*** START OF THE PROJECT GUTENBERG EBOOK\nbody\n"
    "*** END OF THE PROJECT GUTENBERG EBOOK\n"
)


def _client(tmp_path: Path, documents: dict[int, str]) -> BooklakeClient:
    config = replace(
        BooklakeConfig.from_env(),
        backend="local",
        staging_dir=tmp_path / "staging",
        local_root=tmp_path / "lake",
        total_books=3,
        max_retries=40,
        random_seed=5,
    )
    session = archive_session(documents, config.archive_base_url)
    return BooklakeClient(config, fetcher=ArchiveFetcher.from_config(config, session=session))


def test_ingest_returns_committed_outcome_and_receipt(tmp_path: Path) -> None:
    """Successful ingestion should be reportable by partition."""
    client = _client(tmp_path, {3: _TEXT})
    timestamp = datetime(2024, 12, 31, 23, 59)

    outcome = client.ingest(3, timestamp)
    receipt = client.receipt_for(3, timestamp)

    assert outcome.succeeded and outcome.stage == "committed"
    assert (receipt.date, receipt.hour, receipt.path) == (
        "20241231",
        "23",
        "datalake/20241231/23/3",
    )


def test_ingest_random_skips_existing_books(tmp_path: Path) -> None:
    """Random ingestion should pick an id not yet in the datalake."""
    client = _client(tmp_path, {1: _TEXT, 2: _TEXT})
    client.ingest(1)

    book_id = client.ingest_random()

    assert book_id == 2 and client.list_books() == [1, 2]


def test_pending_books_lists_uncommitted_pairs(tmp_path: Path) -> None:
    """Staged but uncommitted ids should be reported as pending."""
    client = _client(tmp_path, {2: _TEXT})
    client.service.download_to_staging(2)

    assert client.pending_books() == [2] and client.exists(2) is False
