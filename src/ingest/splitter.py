"""Marker-based document splitting.

Archive texts wrap the book body between literal start and end marker
lines. Everything before the start marker is front matter (the header).
Several phrasings of each marker exist in the wild, so matching runs
over an ordered tuple of accepted literals:

* the start marker with the lowest offset wins,
* the end marker with the highest offset wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.constants import END_MARKERS, START_MARKERS
from core.errors import BooklakeSplitError
from core.types import SplitDocument


@dataclass(frozen=True)
class MarkerMatch:
    """Located marker occurrence.

    Attributes:
        marker: Literal marker text that matched.
        offset: Index of the first marker character in the text.
    """

    marker: str
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.marker)


def find_start_marker(
    text: str,
    markers: Sequence[str] = START_MARKERS,
) -> MarkerMatch | None:
    """Return the earliest occurrence of any start marker."""
    best: MarkerMatch | None = None
    for marker in markers:
        offset = text.find(marker)
        if offset >= 0 and (best is None or offset < best.offset):
            best = MarkerMatch(marker=marker, offset=offset)
    return best


def find_end_marker(
    text: str,
    markers: Sequence[str] = END_MARKERS,
) -> MarkerMatch | None:
    """Return the last occurrence of any end marker."""
    best: MarkerMatch | None = None
    for marker in markers:
        offset = text.rfind(marker)
        if offset >= 0 and (best is None or offset > best.offset):
            best = MarkerMatch(marker=marker, offset=offset)
    return best


def split_document_or_raise(raw_text: str) -> SplitDocument:
    """Split raw archive text into header and body.

    Args:
        raw_text: Full decoded document text.

    Returns:
        Trimmed header and body.

    Raises:
        BooklakeSplitError: If a marker is missing or the end marker does not
            come after the start marker.
    """
    start_match = find_start_marker(raw_text)
    if start_match is None:
        raise BooklakeSplitError("Malformed document: no start marker found.")
    end_match = find_end_marker(raw_text)
    if end_match is None:
        raise BooklakeSplitError("Malformed document: no end marker found.")
    if end_match.offset <= start_match.end:
        raise BooklakeSplitError(
            "Malformed document: end marker at offset "
            f"{end_match.offset} does not follow start marker ending at {start_match.end}."
        )
    header = raw_text[: start_match.offset].strip()
    body = raw_text[start_match.end : end_match.offset].strip()
    return SplitDocument(header=header, body=body)


def split_document(raw_text: str) -> SplitDocument | None:
    """Split raw archive text, returning None for malformed documents."""
    try:
        return split_document_or_raise(raw_text)
    except BooklakeSplitError:
        return None
