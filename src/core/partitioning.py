"""Datalake partition key helpers.

This module owns the ``<prefix>/<YYYYMMDD>/<HH>/<id>`` key scheme shared
by every storage adapter so reporting paths and object keys stay aligned.
"""

from __future__ import annotations

from datetime import datetime

from core.constants import (
    BODY_OBJECT_SUFFIX,
    HEADER_OBJECT_SUFFIX,
    PARTITION_DATE_FORMAT,
    PARTITION_HOUR_FORMAT,
)
from core.types import PartitionKey


def normalize_prefix(prefix: str) -> str:
    """Strip surrounding slashes and whitespace from a key prefix."""
    return prefix.strip().strip("/")


def partition_for(timestamp: datetime) -> PartitionKey:
    """Derive the date/hour partition for a timestamp.

    Naive timestamps are taken as local time. Aware timestamps are
    converted to the system local zone first.

    Args:
        timestamp: Commit timestamp.

    Returns:
        Zero-padded partition key.
    """
    local_timestamp = timestamp.astimezone() if timestamp.tzinfo is not None else timestamp
    return PartitionKey(
        date=local_timestamp.strftime(PARTITION_DATE_FORMAT),
        hour=local_timestamp.strftime(PARTITION_HOUR_FORMAT),
    )


def partition_prefix(prefix: str, timestamp: datetime) -> str:
    """Build the partition folder key, always ending with a slash."""
    partition = partition_for(timestamp)
    return _join(normalize_prefix(prefix), partition.date, partition.hour) + "/"


def relative_path(prefix: str, book_id: int, timestamp: datetime) -> str:
    """Build the extension-less reporting path for a book."""
    return partition_prefix(prefix, timestamp) + str(book_id)


def body_key(prefix: str, book_id: int, timestamp: datetime) -> str:
    return relative_path(prefix, book_id, timestamp) + BODY_OBJECT_SUFFIX


def header_key(prefix: str, book_id: int, timestamp: datetime) -> str:
    return relative_path(prefix, book_id, timestamp) + HEADER_OBJECT_SUFFIX


def search_prefix(prefix: str) -> str:
    """Return the listing prefix covering every partition."""
    normalized_prefix = normalize_prefix(prefix)
    return f"{normalized_prefix}/" if normalized_prefix else ""


def book_id_from_body_key(key: str) -> int | None:
    """Extract the book id from a body object key.

    Args:
        key: Object key or relative path.

    Returns:
        Parsed id, or None when the key is not a numeric body object.
    """
    if not key.endswith(BODY_OBJECT_SUFFIX):
        return None
    file_name = key.rsplit("/", 1)[-1]
    id_text = file_name[: -len(BODY_OBJECT_SUFFIX)]
    if not (id_text.isascii() and id_text.isdigit()):
        return None
    return int(id_text)


def _join(*segments: str) -> str:
    return "/".join(segment for segment in segments if segment)
