"""Domain models for storage sections, stored foods and the grocery list."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Section:
    """A user-defined storage area such as "Fridge" or "Pantry"."""

    id: str
    user_id: UUID
    name: str
    color: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class InventoryItem:
    """A food stored in a section with its expiration date."""

    id: UUID
    user_id: UUID
    section_id: str
    name: str
    expires_at: datetime
    calories: float
    protein: float
    carbs: float
    fats: float
    barcode: str | None
    added_at: datetime | None = None


@dataclass(frozen=True)
class GroceryItem:
    """An entry on the grocery list."""

    id: UUID
    user_id: UUID
    name: str
    qty: str | None
    checked: bool
    position: int
