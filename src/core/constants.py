"""Core constants used across booklake modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_STAGING_PATH = Path("staging/downloads")
DEFAULT_LOCAL_ROOT = Path(".booklake")
DEFAULT_BACKEND = "s3"
SUPPORTED_BACKENDS = ("local", "s3")
DEFAULT_S3_BUCKET = "booklake-datalake"
DEFAULT_DATALAKE_PREFIX = "datalake"
DEFAULT_TOTAL_BOOKS = 70000
DEFAULT_MAX_RETRIES = 10
DEFAULT_PORT = 7070
DEFAULT_ARCHIVE_BASE_URL = "https://www.gutenberg.org/cache/epub"
DEFAULT_USER_AGENT = "booklake-ingestion/1.0"
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_READ_TIMEOUT_SECONDS = 30.0
START_MARKERS = (
    "*** START OF THE PROJECT GUTENBERG EBOOK",
    "*** START OF THIS PROJECT GUTENBERG EBOOK",
)
END_MARKERS = (
    "*** END OF THE PROJECT GUTENBERG EBOOK",
    "*** END OF THIS PROJECT GUTENBERG EBOOK",
)
STAGED_HEADER_SUFFIX = "_header.txt"
STAGED_BODY_SUFFIX = "_body.txt"
STAGING_TEMP_SUFFIX = ".tmp"
BODY_OBJECT_SUFFIX = ".body.txt"
HEADER_OBJECT_SUFFIX = ".header.txt"
PARTITION_DATE_FORMAT = "%Y%m%d"
PARTITION_HOUR_FORMAT = "%H"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
S3_LIST_PAGE_SIZE = 1000
