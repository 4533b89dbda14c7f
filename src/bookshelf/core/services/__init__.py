from .book_service import BookService
from .database import DbManageService, DbSessionService

__all__ = ["BookService", "DbManageService", "DbSessionService"]
