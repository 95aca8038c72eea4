"""Page input models."""

from pydantic import BaseModel, Field


class PageCreateModel(BaseModel):
    name: str = Field(min_length=1, description="Display name")
    slug: str | None = Field(default=None, description="Unique URL slug")
