"""Tests for book id parsing."""

import pytest

from bookshelf.api.http.path_params import parse_book_id
from bookshelf.core.errors import InvalidBookIdError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1", 1),
        ("123", 123),
        ("007", 7),
        ("-5", -5),
        ("+5", 5),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_parses_signed_64_bit_integers(raw, expected):
    assert parse_book_id(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "abc",
        "12abc",
        "1.0",
        "1_000",
        " 1",
        "1/extra",
        "9223372036854775808",
        "-9223372036854775809",
    ],
)
def test_rejects_everything_else(raw):
    with pytest.raises(InvalidBookIdError) as exc_info:
        parse_book_id(raw)

    assert exc_info.value.status_code == 400
    assert exc_info.value.raw_id == raw
