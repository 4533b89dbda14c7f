"""Field rules checked before a book payload reaches the database."""

from __future__ import annotations

from dataclasses import dataclass

from bookshelf.core.errors import InvalidPayloadError
from bookshelf.entities.book import BookPayload

REQUIRED_TEXT_FIELDS = ("title", "author")


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


def validate_book_payload(payload: BookPayload) -> list[Violation]:
    """Return every rule the payload breaks, in field order."""
    violations = []
    for field in REQUIRED_TEXT_FIELDS:
        if not getattr(payload, field):
            violations.append(Violation(field=field, message="must not be empty"))
    return violations


def ensure_valid(payload: BookPayload) -> BookPayload:
    """Raise InvalidPayloadError when the payload breaks any rule."""
    violations = validate_book_payload(payload)
    if violations:
        raise InvalidPayloadError(violations)
    return payload
