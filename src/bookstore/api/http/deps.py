"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.utils.parsing import parse_body, parse_book_id
from src.bookstore.core.exceptions import InvalidBookIdError, MalformedBodyError
from src.bookstore.entities.service.book import BookPayload, BookRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependency container created by the application lifespan."""
    return request.app.state.app_dependencies


def get_db_session(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> Iterator[Session]:
    """Yield a database session that is closed when the request ends."""
    with app_deps.database_service.session_scope() as session:
        yield session


def get_book_repository(session: Session = Depends(get_db_session)) -> BookRepository:
    return BookRepository(session)


def book_id_path(book_id: str) -> int:
    """Parse the ``{book_id}`` path segment, rejecting it with 400 when invalid."""
    try:
        return parse_book_id(book_id)
    except InvalidBookIdError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


async def book_payload(request: Request) -> BookPayload:
    """Decode the JSON request body, rejecting it with 400 when malformed."""
    raw = await request.body()
    try:
        return parse_body(raw, BookPayload)
    except MalformedBodyError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
