"""Pydantic request models for the inventory API."""

from uuid import UUID

from pydantic import AwareDatetime, BaseModel, Field


class SectionRequest(BaseModel):
    """Section lookup-or-create payload."""

    name: str = Field(min_length=1)
    color: str | None = None


class ManualItemRequest(BaseModel):
    """Manually entered food."""

    name: str = Field(min_length=1)
    expires_at: AwareDatetime
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0


class ScannedItemRequest(BaseModel):
    """Barcode to look up and store in a section."""

    barcode: str
    region: str | None = None
    language: str | None = None


class GroceryItemRequest(BaseModel):
    """Grocery list entry."""

    name: str = Field(min_length=1)
    qty: str | None = None


class ReorderRequest(BaseModel):
    """Grocery item ids in their new display order."""

    ids: list[UUID]
