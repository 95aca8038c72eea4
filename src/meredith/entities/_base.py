from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base domain entity identified by an integer surrogate key.

    ``id`` is ``None`` until the entity has been persisted.
    """

    id: int | None = PydanticField(
        default=None,
        description="Surrogate key assigned by the database",
    )


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement integer key and audit timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Surrogate key assigned by the database",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
