"""Bookshelf: a small HTTP CRUD service for books stored in PostgreSQL."""

__version__ = "1.0.0"
