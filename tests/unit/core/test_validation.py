"""Tests for the book payload rules."""

import pytest

from bookshelf.core.errors import InvalidPayloadError
from bookshelf.core.validation import Violation, ensure_valid, validate_book_payload
from bookshelf.entities.book import BookPayload


def test_valid_payload_has_no_violations(book_payload):
    assert validate_book_payload(book_payload) == []
    assert ensure_valid(book_payload) is book_payload


def test_all_violations_are_reported():
    violations = validate_book_payload(BookPayload(year=2023))

    assert violations == [
        Violation(field="title", message="must not be empty"),
        Violation(field="author", message="must not be empty"),
    ]


def test_year_has_no_range_rule():
    assert validate_book_payload(BookPayload(title="T", author="A", year=-5)) == []


def test_ensure_valid_raises_with_violations():
    with pytest.raises(InvalidPayloadError) as exc_info:
        ensure_valid(BookPayload(title="Dune"))

    error = exc_info.value
    assert error.status_code == 400
    assert error.violations == [Violation(field="author", message="must not be empty")]
    assert error.public_message() == "Invalid book payload:\n- author: must not be empty"
