"""Entity: Book."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class Book(BaseModel):
    """Book as returned to clients.

    The JSON field names are fixed: ``id``, ``title``, ``author``, ``year``.
    """

    id: int = Field(description="Identifier assigned by the database")
    title: str = Field(description="Title")
    author: str = Field(description="Author")
    year: int = Field(description="Publication year")


class BookPayload(BaseModel):
    """Request body for creating or replacing a book.

    Missing fields take their zero value so that the presence checks report
    them instead of the JSON decoder. Any ``id`` in the body is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: StrictStr = Field(default="", description="Title")
    author: StrictStr = Field(default="", description="Author")
    year: StrictInt = Field(default=0, description="Publication year")
