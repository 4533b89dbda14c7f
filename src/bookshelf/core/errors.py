"""Exceptions raised by the book service and mapped onto HTTP responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bookshelf.core.validation import Violation


class BookServiceError(Exception):
    """Base class for errors that end a request with a plain-text response."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def public_message(self, expose_details: bool = False) -> str:
        """Text sent back to the client."""
        return self.message


class InvalidBookIdError(BookServiceError):
    status_code = 400

    def __init__(self, raw_id: str) -> None:
        super().__init__("Invalid book ID")
        self.raw_id = raw_id


class InvalidPayloadError(BookServiceError):
    """The request body parsed but broke one or more field rules."""

    status_code = 400

    def __init__(self, violations: list[Violation]) -> None:
        super().__init__("Invalid book payload")
        self.violations = violations

    def public_message(self, expose_details: bool = False) -> str:
        lines = [f"{self.message}:"]
        lines.extend(f"- {v.field}: {v.message}" for v in self.violations)
        return "\n".join(lines)


class BookNotFoundError(BookServiceError):
    status_code = 404


class StorageError(BookServiceError):
    """A database call failed or ran past its deadline."""

    status_code = 500

    def __init__(self, message: str, detail: str) -> None:
        super().__init__(message)
        self.detail = detail

    def public_message(self, expose_details: bool = False) -> str:
        if expose_details:
            return f"{self.message}: {self.detail}"
        return self.message


class DatabaseStartupError(RuntimeError):
    """The database was unreachable or the schema could not be created."""
