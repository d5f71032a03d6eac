"""Book API router with CRUD operations."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from src.bookstore.api.http.deps import book_id_path, book_payload, get_book_repository
from src.bookstore.core.exceptions import BookNotFoundError
from src.bookstore.entities.service.book import Book, BookPayload, BookRepository

router = APIRouter()


@router.post("/", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookPayload = Depends(book_payload),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Create a new book."""
    return repository.create(Book(**payload.model_dump()))


@router.get("/", response_model=list[Book])
def list_books(
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book]:
    """List all books."""
    return repository.list_all()


@router.get("/{book_id}", response_model=Book)
def get_book(
    book_id: int = Depends(book_id_path),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Get a book by ID; an unknown ID yields the zero-value book."""
    book = repository.get(book_id)
    if book is None:
        logger.debug("Book {} not found; returning zero value", book_id)
        return Book()
    return book


@router.put("/{book_id}", response_model=Book)
def update_book(
    book_id: int = Depends(book_id_path),
    payload: BookPayload = Depends(book_payload),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Update a book, keeping every field the payload leaves empty."""
    existing = repository.get(book_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Book not found")

    try:
        return repository.save(existing.merge(payload))
    except BookNotFoundError as e:
        # Deleted between the read and the write
        raise HTTPException(status_code=404, detail="Book not found") from e


@router.delete("/{book_id}", response_model=Book)
def delete_book(
    book_id: int = Depends(book_id_path),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Soft-delete a book and return it; an unknown ID yields the zero-value book."""
    deleted = repository.delete(book_id)
    return deleted if deleted is not None else Book()
