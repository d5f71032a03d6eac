"""Error types raised by the parsing and persistence layers."""


class BookstoreError(Exception):
    """Base class for all application errors."""


class InvalidBookIdError(BookstoreError):
    """The path identifier is not a signed 64-bit integer."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid book id: {raw!r}")
        self.raw = raw


class MalformedBodyError(BookstoreError):
    """The request body could not be decoded into the target structure."""


class BookNotFoundError(BookstoreError):
    """No live book matches the requested identifier."""

    def __init__(self, book_id: int) -> None:
        super().__init__(f"Book {book_id} not found")
        self.book_id = book_id


class PersistenceError(BookstoreError):
    """The database rejected or failed to execute an operation."""
