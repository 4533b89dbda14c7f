"""Parsing of the ``{book_id}`` path parameter."""

import re

from bookshelf.core.errors import InvalidBookIdError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_BOOK_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_book_id(raw: str) -> int:
    """Parse the id segment of ``/books/<id>`` as a signed 64-bit integer.

    Raises:
        InvalidBookIdError: The segment is not a plain decimal integer or does
            not fit in 64 bits.
    """
    if not _BOOK_ID_RE.fullmatch(raw):
        raise InvalidBookIdError(raw)
    book_id = int(raw)
    if not _INT64_MIN <= book_id <= _INT64_MAX:
        raise InvalidBookIdError(raw)
    return book_id


def get_book_id(book_id: str) -> int:
    """FastAPI dependency resolving the ``book_id`` path parameter."""
    return parse_book_id(book_id)
