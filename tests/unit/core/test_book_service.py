"""Tests for BookService: one bounded statement per call."""

import asyncio
import time
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from bookshelf.core.errors import BookNotFoundError, InvalidPayloadError, StorageError
from bookshelf.core.services import BookService
from bookshelf.core.services.book_service import _CommitGate
from bookshelf.entities.book import BookPayload, BookRepository


class TestBookService:
    @pytest.mark.asyncio
    async def test_create_then_get(self, book_service: BookService, book_payload):
        created = await book_service.create(book_payload)

        fetched = await book_service.get(created.id)

        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_rejects_empty_fields(self, book_service: BookService):
        with pytest.raises(InvalidPayloadError):
            await book_service.create(BookPayload(title="", author="John Doe"))

        assert await book_service.list_books() == []

    @pytest.mark.asyncio
    async def test_update_validates_like_create(
        self, book_service: BookService, book_payload
    ):
        created = await book_service.create(book_payload)

        with pytest.raises(InvalidPayloadError):
            await book_service.update(created.id, BookPayload(title="New", author=""))

        assert await book_service.get(created.id) == created

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(
        self, book_service: BookService, book_payload
    ):
        with pytest.raises(BookNotFoundError, match="Book with this ID not found"):
            await book_service.update(12345, book_payload)

    @pytest.mark.asyncio
    async def test_delete_then_get(self, book_service: BookService, book_payload):
        created = await book_service.create(book_payload)

        await book_service.delete(created.id)

        with pytest.raises(BookNotFoundError, match="Book not found"):
            await book_service.get(created.id)
        with pytest.raises(BookNotFoundError):
            await book_service.delete(created.id)

    @pytest.mark.asyncio
    async def test_database_error_becomes_storage_error(
        self, book_service: BookService, monkeypatch
    ):
        def broken(self):
            raise OperationalError("SELECT", {}, Exception("connection reset"))

        monkeypatch.setattr(BookRepository, "list_all", broken)

        with pytest.raises(StorageError) as exc_info:
            await book_service.list_books()

        error = exc_info.value
        assert error.status_code == 500
        assert error.public_message() == "Failed to list books"
        assert "connection reset" in error.public_message(expose_details=True)

    @pytest.mark.asyncio
    async def test_slow_call_hits_deadline(self, database_service, monkeypatch):
        def slow(self):
            time.sleep(0.5)
            return []

        monkeypatch.setattr(BookRepository, "list_all", slow)
        service = BookService(database_service, timeout=0.05)

        with pytest.raises(StorageError) as exc_info:
            await service.list_books()

        assert "deadline" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_create_past_deadline_is_rolled_back(self, database_service, monkeypatch):
        insert = BookRepository.create

        def slow_create(self, payload):
            time.sleep(0.3)
            return insert(self, payload)

        monkeypatch.setattr(BookRepository, "create", slow_create)
        service = BookService(database_service, timeout=0.05)

        with pytest.raises(StorageError, match="Failed to create book"):
            await service.create(BookPayload(title="T", author="A", year=1))

        # let the abandoned worker finish before looking at the table
        await asyncio.sleep(0.6)
        assert await BookService(database_service, timeout=3.0).list_books() == []

    @pytest.mark.asyncio
    async def test_update_past_deadline_is_rolled_back(
        self, database_service, book_payload, monkeypatch
    ):
        service = BookService(database_service, timeout=3.0)
        created = await service.create(book_payload)
        apply_update = BookRepository.update

        def slow_update(self, book_id, payload):
            affected = apply_update(self, book_id, payload)
            time.sleep(0.3)
            return affected

        monkeypatch.setattr(BookRepository, "update", slow_update)
        hurried = BookService(database_service, timeout=0.05)

        with pytest.raises(StorageError, match="Failed to update book"):
            await hurried.update(created.id, BookPayload(title="New", author="Other"))

        await asyncio.sleep(0.6)
        assert await service.get(created.id) == created


class TestCommitGate:
    def test_commits_when_not_abandoned(self):
        gate = _CommitGate()
        session = Mock()

        assert gate.commit(session) is True
        session.commit.assert_called_once()
        assert gate.abandon() is False

    def test_rolls_back_once_abandoned(self):
        gate = _CommitGate()
        session = Mock()

        assert gate.abandon() is True
        assert gate.commit(session) is False
        session.rollback.assert_called_once()
        session.commit.assert_not_called()
