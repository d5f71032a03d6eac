from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

# SQLite only auto-assigns rowids for columns declared exactly INTEGER PRIMARY KEY.
IdentifierType = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def utcnow() -> datetime:
    return datetime.now(UTC)


class Entity(BaseModel):
    """Base entity with a database-assigned integer identifier and audit fields.

    The JSON form uses the keys ``ID``, ``CreatedAt``, ``UpdatedAt`` and
    ``DeletedAt``; Python code uses the snake_case field names. A freshly
    constructed entity is the zero value: ``id`` 0 and no timestamps.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int = PydanticField(
        default=0, alias="ID", description="Identifier assigned by the database"
    )
    created_at: datetime | None = PydanticField(default=None, alias="CreatedAt")
    updated_at: datetime | None = PydanticField(default=None, alias="UpdatedAt")
    deleted_at: datetime | None = PydanticField(default=None, alias="DeletedAt")


class EntityTable(SQLModel, table=False):
    """Base persistence model with auto-increment identifier and soft-delete marker."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        sa_type=IdentifierType,
        description="Identifier assigned by the database",
    )

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
    deleted_at: datetime | None = Field(default=None, index=True)
