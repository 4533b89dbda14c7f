from dataclasses import dataclass

from bookshelf.core.services import BookService, DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    book_service: BookService
