"""S3-backed datalake adapter.

Objects are written as ``<prefix>/<YYYYMMDD>/<HH>/<id>.body.txt`` and
``<id>.header.txt``. Queries page through ``list_objects_v2`` over the
whole prefix; any failed page fails the query.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Iterator

from botocore.exceptions import BotoCoreError, ClientError

from core.constants import BODY_OBJECT_SUFFIX, S3_LIST_PAGE_SIZE, TEXT_CONTENT_TYPE
from core.errors import BooklakeCommitError, BooklakeQueryError
from core.logging_config import get_logger
from core.partitioning import (
    body_key,
    book_id_from_body_key,
    header_key,
    partition_prefix,
    relative_path,
    search_prefix,
)
from ingest.staging import staged_pair_paths

_LOGGER = get_logger(__name__)


class S3DatalakeStorage:
    """Datalake storage on an S3-compatible bucket."""

    backend_name = "S3"

    def __init__(
        self,
        s3_client: Any,
        bucket: str,
        prefix: str,
        page_size: int = S3_LIST_PAGE_SIZE,
    ) -> None:
        self._s3 = s3_client
        self._bucket = bucket
        self._prefix = prefix
        self._page_size = page_size

    def save_book(self, book_id: int, staging_dir: Path, timestamp: datetime) -> None:
        """Upload body then header, then delete the staged pair.

        Args:
            book_id: Book identifier.
            staging_dir: Directory holding the staged pair.
            timestamp: Commit timestamp selecting the partition.

        Raises:
            BooklakeCommitError: If a staged file is missing or an upload fails.
        """
        pair = staged_pair_paths(staging_dir, book_id)
        if not pair.body_path.is_file() or not pair.header_path.is_file():
            raise BooklakeCommitError(
                f"Missing staged files for book {book_id} at {staging_dir}. "
                "Download the book to staging before committing."
            )
        self._put_text_file(pair.body_path, body_key(self._prefix, book_id, timestamp))
        self._put_text_file(pair.header_path, header_key(self._prefix, book_id, timestamp))
        pair.body_path.unlink(missing_ok=True)
        pair.header_path.unlink(missing_ok=True)
        _LOGGER.info(
            "book_uploaded",
            book_id=book_id,
            location=f"s3://{self._bucket}/{partition_prefix(self._prefix, timestamp)}",
        )

    def exists(self, book_id: int) -> bool:
        needle = f"{book_id}{BODY_OBJECT_SUFFIX}"
        for key in self._iter_keys(f"exists({book_id})"):
            if key == needle or key.endswith(f"/{needle}"):
                return True
        return False

    def list_books(self) -> list[int]:
        book_ids: set[int] = set()
        for key in self._iter_keys("list_books()"):
            book_id = book_id_from_body_key(key)
            if book_id is not None:
                book_ids.add(book_id)
        return sorted(book_ids)

    def relative_path_for(self, book_id: int, timestamp: datetime) -> str:
        return relative_path(self._prefix, book_id, timestamp)

    def _put_text_file(self, local_path: Path, object_key: str) -> None:
        try:
            with local_path.open("rb") as handle:
                self._s3.put_object(
                    Bucket=self._bucket,
                    Key=object_key,
                    Body=handle,
                    ContentType=TEXT_CONTENT_TYPE,
                )
        except (BotoCoreError, ClientError, OSError) as error:
            raise BooklakeCommitError(
                f"Failed to upload {local_path} to s3://{self._bucket}/{object_key}: {error}. "
                "Staged files were kept; retry the commit."
            ) from error

    def _iter_keys(self, operation: str) -> Iterator[str]:
        """Yield every object key under the datalake prefix.

        Raises:
            BooklakeQueryError: If any page request fails.
        """
        paginator = self._s3.get_paginator("list_objects_v2")
        pages = paginator.paginate(
            Bucket=self._bucket,
            Prefix=search_prefix(self._prefix),
            PaginationConfig={"PageSize": self._page_size},
        )
        try:
            for page in pages:
                for obj in page.get("Contents", []):
                    yield obj["Key"]
        except (BotoCoreError, ClientError) as error:
            raise BooklakeQueryError(
                f"Error listing s3://{self._bucket}/{search_prefix(self._prefix)} "
                f"for {operation}: {error}"
            ) from error
