"""Booklake exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class BooklakeError(Exception):
    """Base exception for all booklake failures."""


class BooklakeConfigError(BooklakeError):
    """Raised for invalid runtime configuration."""


class BooklakeFetchError(BooklakeError):
    """Raised when a document cannot be fetched from the archive."""


class BooklakeSplitError(BooklakeError):
    """Raised when a raw document has missing or out-of-order markers."""


class BooklakeStagingError(BooklakeError):
    """Raised for local staging write failures."""


class BooklakeStoreError(BooklakeError):
    """Raised for datalake storage failures."""


class BooklakeCommitError(BooklakeStoreError):
    """Raised when staged files cannot be persisted to the datalake."""


class BooklakeQueryError(BooklakeStoreError):
    """Raised when listing or existence queries against the datalake fail."""


class BooklakeDependencyError(BooklakeError):
    """Raised when an optional runtime dependency is missing."""


class BooklakeInvalidIdError(BooklakeError):
    """Raised when a book id is not a positive integer."""
