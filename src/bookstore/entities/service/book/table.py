"""Book database table model."""

from src.bookstore.entities.core._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity so the wire format and the
    storage layout can change independently.
    """

    __tablename__ = "books"

    name: str = ""
    author: str = ""
    publication: str = ""
