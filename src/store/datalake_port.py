"""Datalake storage contract.

Adapters persist staged header/body pairs under time partitions and
answer existence/listing queries across every partition.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol


class DatalakeStorage(Protocol):
    """Storage operations required by the ingestion orchestrator.

    Attributes:
        backend_name: Short adapter label reported by the control surface.
    """

    backend_name: str

    def save_book(self, book_id: int, staging_dir: Path, timestamp: datetime) -> None:
        """Persist the staged pair under the timestamp partition, then clear it.

        Raises:
            BooklakeCommitError: If a staged file is missing or upload fails.
        """
        ...

    def exists(self, book_id: int) -> bool:
        """Return whether any partition holds a body object for the id.

        Raises:
            BooklakeQueryError: If listing fails.
        """
        ...

    def list_books(self) -> list[int]:
        """Return ascending unique ids with a body object in any partition.

        Raises:
            BooklakeQueryError: If listing fails.
        """
        ...

    def relative_path_for(self, book_id: int, timestamp: datetime) -> str:
        """Return ``<prefix>/<YYYYMMDD>/<HH>/<id>`` without any I/O."""
        ...
