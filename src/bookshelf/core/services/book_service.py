"""Book operations bounded by the per-request database deadline."""

import asyncio
import threading
from collections.abc import Callable
from typing import TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from bookshelf.core.errors import BookNotFoundError, StorageError
from bookshelf.core.services.database import DbSessionService
from bookshelf.core.validation import ensure_valid
from bookshelf.entities.book import Book, BookPayload, BookRepository

T = TypeVar("T")


class _CommitGate:
    """Decides, under one lock, whether a worker commits or the caller gives up.

    Whichever side takes the lock first wins: once the caller abandons the
    call the worker rolls back, and once the worker starts committing the
    caller waits for that commit instead of reporting a failure.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._abandoned = False
        self._committed = False

    def commit(self, session: Session) -> bool:
        with self._lock:
            if self._abandoned:
                session.rollback()
                return False
            session.commit()
            self._committed = True
            return True

    def abandon(self) -> bool:
        """Returns False when a commit is under way or already done."""
        if not self._lock.acquire(blocking=False):
            return False
        try:
            if not self._committed:
                self._abandoned = True
            return self._abandoned
        finally:
            self._lock.release()


def _discard_outcome(future: asyncio.Future) -> None:
    # Nobody awaits an abandoned worker; retrieve its error so asyncio stays quiet
    if not future.cancelled():
        future.exception()


class BookService:
    """Runs one repository statement per call on its own session.

    The blocking call happens on a worker thread and is abandoned once
    ``timeout`` seconds pass or the request is cancelled. An abandoned call
    rolls back instead of committing, so a write reported as failed never
    lands. The session lives entirely inside the worker thread and is closed
    there when the driver returns.
    """

    def __init__(self, database_service: DbSessionService, timeout: float) -> None:
        self._database_service = database_service
        self._timeout = timeout

    async def _run(self, error_message: str, operation: Callable[[BookRepository], T]) -> T:
        gate = _CommitGate()

        def _call() -> T:
            with self._database_service.get_session() as session:
                result = operation(BookRepository(session))
                if not gate.commit(session):
                    logger.warning("{}: rolled back after the call was abandoned", error_message)
                return result

        worker = asyncio.ensure_future(asyncio.to_thread(_call))
        try:
            try:
                return await asyncio.wait_for(asyncio.shield(worker), timeout=self._timeout)
            except asyncio.CancelledError:
                gate.abandon()
                worker.add_done_callback(_discard_outcome)
                raise
            except TimeoutError:
                if gate.abandon():
                    worker.add_done_callback(_discard_outcome)
                    raise
                # The commit began before the deadline; its outcome is the answer
                return await worker
        except TimeoutError as e:
            detail = f"database call exceeded {self._timeout}s deadline"
            logger.error("{}: {}", error_message, detail)
            raise StorageError(error_message, detail) from e
        except SQLAlchemyError as e:
            logger.error("{}: {}: {}", error_message, type(e).__name__, e)
            raise StorageError(error_message, str(e)) from e

    async def create(self, payload: BookPayload) -> Book:
        ensure_valid(payload)
        book = await self._run("Failed to create book", lambda repo: repo.create(payload))
        logger.info("Created book {}", book.id)
        return book

    async def list_books(self) -> list[Book]:
        return await self._run("Failed to list books", lambda repo: repo.list_all())

    async def get(self, book_id: int) -> Book:
        book = await self._run("Failed to fetch book", lambda repo: repo.get(book_id))
        if book is None:
            raise BookNotFoundError("Book not found")
        return book

    async def update(self, book_id: int, payload: BookPayload) -> None:
        ensure_valid(payload)
        affected = await self._run(
            "Failed to update book", lambda repo: repo.update(book_id, payload)
        )
        if affected == 0:
            raise BookNotFoundError("Book with this ID not found")
        logger.info("Updated book {}", book_id)

    async def delete(self, book_id: int) -> None:
        affected = await self._run("Failed to delete book", lambda repo: repo.delete(book_id))
        if affected == 0:
            raise BookNotFoundError("Book with this ID not found")
        logger.info("Deleted book {}", book_id)
