"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, Request

from bookshelf.api.http.app_data import ApplicationDependencies
from bookshelf.core.services import BookService
from bookshelf.runtime.config.config_data import ConfigData


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies created at startup."""
    return request.app.state.app_dependencies


def get_app_config(request: Request) -> ConfigData:
    """Get the configuration the application was built with."""
    return request.app.state.config


def get_book_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> BookService:
    """Get the book service bound to the shared engine."""
    return app_deps.book_service
