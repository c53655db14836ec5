"""Unit tests for datalake partition keys."""

from __future__ import annotations

from datetime import datetime

from core.partitioning import (
    body_key,
    book_id_from_body_key,
    header_key,
    partition_for,
    relative_path,
    search_prefix,
)

_TIMESTAMP = datetime(2024, 3, 1, 9, 15)


def test_partition_for_zero_pads_date_and_hour() -> None:
    """Partition strings should be zero padded."""
    partition = partition_for(datetime(2024, 1, 5, 0, 59))

    assert (partition.date, partition.hour) == ("20240105", "00")


def test_keys_share_partition_folder() -> None:
    """Body and header objects should live in the same partition."""
    assert body_key("datalake", 42, _TIMESTAMP) == "datalake/20240301/09/42.body.txt"
    assert header_key("datalake", 42, _TIMESTAMP) == "datalake/20240301/09/42.header.txt"


def test_relative_path_has_no_extension() -> None:
    """Reporting path should match the key scheme without suffix."""
    assert relative_path("datalake", 42, _TIMESTAMP) == "datalake/20240301/09/42"


def test_prefix_slashes_are_normalized() -> None:
    """Leading and trailing slashes in the prefix should be ignored."""
    assert relative_path("/datalake/", 7, _TIMESTAMP) == "datalake/20240301/09/7"
    assert search_prefix("/datalake/") == "datalake/"


def test_empty_prefix_omits_leading_segment() -> None:
    """An empty prefix should produce keys rooted at the partition date."""
    assert body_key("", 3, _TIMESTAMP) == "20240301/09/3.body.txt"
    assert search_prefix("") == ""


def test_book_id_from_body_key_parses_numeric_stems() -> None:
    """Only numeric body keys should yield ids."""
    assert book_id_from_body_key("datalake/20240301/09/42.body.txt") == 42
    assert book_id_from_body_key("datalake/20240301/09/42.header.txt") is None
    assert book_id_from_body_key("datalake/20240301/09/notes.body.txt") is None
    assert book_id_from_body_key("42.body.txt") == 42
