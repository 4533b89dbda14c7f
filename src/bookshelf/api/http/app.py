"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.api.http.app_data import ApplicationDependencies
from bookshelf.api.http.routers import book, health
from bookshelf.api.utils.app_startup import configure_logging
from bookshelf.core.errors import BookServiceError, DatabaseStartupError
from bookshelf.core.services import BookService, DbManageService, DbSessionService
from bookshelf.runtime.config.config_data import ConfigData
from bookshelf.runtime.context import get_config

# expose startup for tests
__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
async def startup(app: FastAPI) -> None:
    """Connect to the database, check it answers and create the books table.

    Any failure is fatal: it is logged and raised as DatabaseStartupError so
    the server process exits instead of serving requests.
    """
    config: ConfigData = app.state.config
    logger.info("Starting up application in {} environment", config.app.environment)

    try:
        database_service = DbSessionService(config.database)
    except SQLAlchemyError as e:
        logger.critical("Invalid database configuration: {}", e)
        raise DatabaseStartupError(f"Invalid database configuration: {e}") from e

    if not await run_in_threadpool(database_service.health_check):
        logger.critical(
            "Database at {} is not reachable", config.database.safe_connection_string
        )
        database_service.dispose()
        raise DatabaseStartupError("Database is not reachable")

    try:
        await run_in_threadpool(DbManageService(database_service.engine).create_all)
    except SQLAlchemyError as e:
        logger.critical("Failed to create books table: {}", e)
        database_service.dispose()
        raise DatabaseStartupError(f"Failed to create books table: {e}") from e

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        book_service=BookService(database_service, timeout=config.app.request_timeout),
    )
    logger.info("Application ready on {}", config.app.base_url)


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    client_ip = request.client.host if request.client else "unknown"

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start {} {}", request.method, request.url.path)
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end {} in {:.1f} ms", response.status_code, duration_ms)

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return PlainTextResponse(
                "Internal Server Error",
                status_code=500,
                headers={"X-Request-ID": request_id},
            )


# --- Exception handlers ---
async def book_service_error_handler(request: Request, exc: BookServiceError):
    config: ConfigData = request.app.state.config
    return PlainTextResponse(
        exc.public_message(expose_details=config.app.expose_error_details),
        status_code=exc.status_code,
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    logger.info("Rejected request body: {}", exc.errors())
    return PlainTextResponse("Invalid JSON", status_code=400)


async def starlette_http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return PlainTextResponse(
            "Method not allowed", status_code=405, headers=exc.headers
        )
    return await http_exception_handler(request, exc)


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application; the database is only touched at startup."""
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app)
        try:
            yield
        finally:
            await shutdown(app)

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Bookshelf",
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.config = config

    app.middleware("http")(log_requests)

    app.add_exception_handler(BookServiceError, book_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_error_handler)

    # --- Router registration ---
    app.include_router(health.router)
    app.include_router(book.router)

    return app


app = create_app()
