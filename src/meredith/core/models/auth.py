"""Authentication models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Verified claims of a Meredith access token."""

    subject: str = Field(description="Authenticated principal (sub)")
    issuer: str = Field(description="Token issuer (iss)")
    roles: list[str] = Field(default_factory=list)
    expires_at: datetime | None = None
    raw: dict[str, Any] = Field(default_factory=dict, description="All verified claims")
