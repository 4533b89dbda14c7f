"""Entities organized by business concept.

Each entity package holds its client-facing model, its table model and its
repository side by side.
"""

from .book import Book, BookPayload, BookRepository, BookTable

__all__ = ["Book", "BookPayload", "BookRepository", "BookTable"]
