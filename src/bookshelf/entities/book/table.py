"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    ``id`` is a SERIAL primary key on PostgreSQL, so the database assigns it
    on insert.
    """

    __tablename__ = "books"

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    author: str = Field(max_length=255)
    year: int
