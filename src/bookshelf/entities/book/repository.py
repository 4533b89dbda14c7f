"""Data-access layer for books.

Each method issues exactly one SQL statement. Committing is left to the
caller so the statement and its commit run inside the same deadline.
"""

from sqlalchemy import delete, update
from sqlmodel import Session, select

from .entity import Book, BookPayload
from .table import BookTable


class BookRepository:
    """Data-access layer for books."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, payload: BookPayload) -> Book:
        row = BookTable(title=payload.title, author=payload.author, year=payload.year)
        self._session.add(row)
        # INSERT ... RETURNING id
        self._session.flush()
        return Book.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Book]:
        rows = self._session.exec(select(BookTable).order_by(BookTable.id)).all()
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def get(self, book_id: int) -> Book | None:
        statement = select(BookTable).where(BookTable.id == book_id)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Book.model_validate(row, from_attributes=True)

    def update(self, book_id: int, payload: BookPayload) -> int:
        """Overwrite title, author and year; return the number of rows changed."""
        statement = (
            update(BookTable)
            .where(BookTable.id == book_id)
            .values(title=payload.title, author=payload.author, year=payload.year)
        )
        return self._session.connection().execute(statement).rowcount

    def delete(self, book_id: int) -> int:
        """Delete the row; return the number of rows removed."""
        statement = delete(BookTable).where(BookTable.id == book_id)
        return self._session.connection().execute(statement).rowcount
