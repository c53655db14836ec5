"""Book id validation shared by the CLI and HTTP layers."""

from __future__ import annotations

from core.errors import BooklakeInvalidIdError


def parse_book_id(raw_value: str | int) -> int:
    """Parse a positive integer book id.

    Args:
        raw_value: Raw id from a path parameter or argument.

    Returns:
        Parsed id.

    Raises:
        BooklakeInvalidIdError: If value is not an integer or is not positive.
    """
    try:
        book_id = int(str(raw_value).strip())
    except ValueError as error:
        raise BooklakeInvalidIdError("book_id must be an integer") from error
    if book_id <= 0:
        raise BooklakeInvalidIdError("book_id must be a positive integer")
    return book_id
