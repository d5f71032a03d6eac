"""Book repository: data access for the books table."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from src.bookstore.core.exceptions import BookNotFoundError, PersistenceError
from src.bookstore.entities.core._base import utcnow

from .entity import Book
from .table import BookTable


class BookRepository:
    """Data-access layer for books.

    Soft-deleted rows (``deleted_at`` set) are invisible to every read.
    Each write commits immediately; there are no multi-operation transactions.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Roll back and re-raise database failures as PersistenceError."""
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.bind(operation=operation, error_type=type(e).__name__).error(
                "Book {} failed: {}", operation, e
            )
            raise PersistenceError(f"Book {operation} failed") from e

    def _get_live_row(self, book_id: int) -> BookTable | None:
        statement = select(BookTable).where(
            BookTable.id == book_id, col(BookTable.deleted_at).is_(None)
        )
        return self._session.exec(statement).first()

    @staticmethod
    def _to_entity(row: BookTable) -> Book:
        return Book.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Book]:
        with self._guard("list"):
            statement = (
                select(BookTable)
                .where(col(BookTable.deleted_at).is_(None))
                .order_by(col(BookTable.id))
            )
            rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def get(self, book_id: int) -> Book | None:
        with self._guard("get"):
            row = self._get_live_row(book_id)
        if row is None:
            return None
        return self._to_entity(row)

    def create(self, book: Book) -> Book:
        """Insert a new row; the identifier and timestamps come from the database layer."""
        row = BookTable(
            name=book.name, author=book.author, publication=book.publication
        )
        with self._guard("create"):
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        logger.info("Created book {}", row.id)
        return self._to_entity(row)

    def save(self, book: Book) -> Book:
        """Write the business fields of ``book`` onto its existing row."""
        with self._guard("save"):
            row = self._get_live_row(book.id)
            if row is None:
                raise BookNotFoundError(book.id)
            row.name = book.name
            row.author = book.author
            row.publication = book.publication
            row.updated_at = utcnow()
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        logger.info("Updated book {}", row.id)
        return self._to_entity(row)

    def delete(self, book_id: int) -> Book | None:
        """Soft-delete the live row with ``book_id``.

        Returns the deleted book, or None when nothing matched.
        """
        with self._guard("delete"):
            row = self._get_live_row(book_id)
            if row is None:
                return None
            row.deleted_at = utcnow()
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        logger.info("Deleted book {}", book_id)
        return self._to_entity(row)
