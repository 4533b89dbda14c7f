"""Book API router with CRUD operations."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.api.http.deps import get_book_service
from bookshelf.api.http.path_params import get_book_id
from bookshelf.core.errors import InvalidBookIdError
from bookshelf.core.services import BookService
from bookshelf.entities.book import Book, BookPayload

ID_METHODS = ("GET", "PUT", "DELETE")

router = APIRouter(prefix="/books", tags=["books"], redirect_slashes=False)


@router.post("", response_model=Book)
async def create_book(
    payload: BookPayload,
    service: BookService = Depends(get_book_service),
) -> Book:
    """Create a new book; the database assigns its id."""
    return await service.create(payload)


@router.get("", response_model=list[Book])
async def list_books(
    service: BookService = Depends(get_book_service),
) -> list[Book]:
    """List every book."""
    return await service.list_books()


@router.get("/{book_id}", response_model=Book)
async def get_book(
    book_id: int = Depends(get_book_id),
    service: BookService = Depends(get_book_service),
) -> Book:
    """Get a book by ID."""
    return await service.get(book_id)


@router.put("/{book_id}", response_class=PlainTextResponse)
async def update_book(
    payload: BookPayload,
    book_id: int = Depends(get_book_id),
    service: BookService = Depends(get_book_service),
) -> str:
    """Overwrite title, author and year of a book."""
    await service.update(book_id, payload)
    return f"Book {book_id} updated successfully"


@router.delete("/{book_id}", response_class=PlainTextResponse)
async def delete_book(
    book_id: int = Depends(get_book_id),
    service: BookService = Depends(get_book_service),
) -> str:
    """Delete a book."""
    await service.delete(book_id)
    return f"Book {book_id} deleted successfully"


@router.api_route(
    "/{raw_path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def unmatched_book_path(request: Request, raw_path: str) -> None:
    """Anything under /books/ that is not a single id segment.

    Trailing slashes and extra segments are treated as an unparsable id;
    other methods are rejected the same way as on /books/{book_id}.
    """
    if request.method in ID_METHODS:
        raise InvalidBookIdError(raw_path)
    raise StarletteHTTPException(
        status_code=405, headers={"Allow": ", ".join(ID_METHODS)}
    )
