"""Book entity module.

- Book / BookPayload: models exchanged with clients
- BookTable: Database persistence model
- BookRepository: Data access layer
"""

from .entity import Book, BookPayload
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookPayload", "BookRepository", "BookTable"]
