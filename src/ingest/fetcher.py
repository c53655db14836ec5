"""Remote archive fetcher.

This module downloads raw book text over HTTP with ``requests``.
It performs exactly one GET per call and never retries.
"""

from __future__ import annotations

from typing import Any

import requests

from core.config import BooklakeConfig
from core.errors import BooklakeFetchError
from core.logging_config import get_logger
from core.types import RawDocument

_LOGGER = get_logger(__name__)


def build_document_url(base_url: str, book_id: int) -> str:
    """Build the archive URL for a book id.

    Args:
        base_url: Archive base URL without trailing slash.
        book_id: Book identifier.

    Returns:
        URL of the form ``<base>/<id>/pg<id>.txt``.
    """
    return f"{base_url.rstrip('/')}/{book_id}/pg{book_id}.txt"


class ArchiveFetcher:
    """HTTP fetcher for plain-text archive documents."""

    def __init__(
        self,
        base_url: str,
        user_agent: str,
        connect_timeout: float,
        read_timeout: float,
        session: Any | None = None,
    ) -> None:
        self._base_url = base_url
        self._headers = {"User-Agent": user_agent}
        self._timeout = (connect_timeout, read_timeout)
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: BooklakeConfig, session: Any | None = None) -> "ArchiveFetcher":
        """Create a fetcher from runtime config."""
        return cls(
            base_url=config.archive_base_url,
            user_agent=config.user_agent,
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            session=session,
        )

    def fetch(self, book_id: int) -> RawDocument | None:
        """Fetch raw text for a book, returning None on any failure.

        Args:
            book_id: Book identifier.

        Returns:
            Raw document, or None for non-200 responses and transport errors.
        """
        try:
            return self.fetch_or_raise(book_id)
        except BooklakeFetchError as error:
            _LOGGER.warning("book_fetch_failed", book_id=book_id, reason=str(error))
            return None

    def fetch_or_raise(self, book_id: int) -> RawDocument:
        """Fetch raw text for a book.

        Args:
            book_id: Book identifier.

        Returns:
            Raw document with decoded UTF-8 text.

        Raises:
            BooklakeFetchError: For transport errors, timeouts, and non-200 status.
        """
        url = build_document_url(self._base_url, book_id)
        try:
            response = self._session.get(
                url,
                headers=self._headers,
                timeout=self._timeout,
                allow_redirects=True,
            )
        except requests.RequestException as error:
            raise BooklakeFetchError(f"Request to {url} failed: {error}") from error
        if response.status_code != 200:
            raise BooklakeFetchError(
                f"Archive returned HTTP {response.status_code} for {url}."
            )
        # Malformed bytes become U+FFFD so legacy texts with stray Latin-1 still ingest.
        text = response.content.decode("utf-8", errors="replace")
        return RawDocument(book_id=book_id, source_url=url, text=text)
