"""
Material domain entity for the materials catalog.

Catalog edits never reach back into order lines: a line keeps the unit
price captured when it was ordered.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator


class Material(BaseModel):
    """A material that can be ordered and stocked."""

    id: int | None = None
    name: str
    unit_of_measure: str
    unit_price: float = 0.0
    description: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name", "unit_of_measure", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v
