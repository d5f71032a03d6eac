"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.bookstore.entities.core._base import Entity

BOOK_FIELDS = ("name", "author", "publication")


class Book(Entity):
    """Book entity representing a title in the catalogue.

    This is the domain model returned by the repository and serialized by the
    API. It inherits the identifier and audit fields from Entity.
    """

    name: str = Field(default="", description="Title of the book")
    author: str = Field(default="", description="Author of the book")
    publication: str = Field(default="", description="Publisher of the book")

    def merge(self, update: "BookPayload") -> "Book":
        """Return a copy with every non-empty field of ``update`` applied.

        Empty strings mean "leave unchanged".
        """
        changes = {
            field: value
            for field in BOOK_FIELDS
            if (value := getattr(update, field))
        }
        return self.model_copy(update=changes)

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.author == other.author
            and self.publication == other.publication
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((self.id, self.name, self.author, self.publication))


class BookPayload(BaseModel):
    """Request body for create and update.

    Unknown keys (including ``ID`` and the audit fields) are ignored, missing
    keys and JSON null become empty strings.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    author: str = ""
    publication: str = ""

    @field_validator(*BOOK_FIELDS, mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value
