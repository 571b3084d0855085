"""Services for stored foods and their expirations."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from fridgy.domain.barcodes import normalize_barcode
from fridgy.domain.inventory import InventoryItem
from fridgy.domain.nutrition import FoodRecord
from fridgy.errors import NotFoundError

EXPIRY_HOUR = 9

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for stored foods."""

    def add_item(self, user_id: UUID, payload: dict[str, object]) -> InventoryItem:
        """Create a stored food and return it."""

    def list_items(self, user_id: UUID, section_id: str) -> list[InventoryItem]:
        """Return the foods stored in a section."""

    def list_expiring(self, user_id: UUID, before: datetime) -> list[InventoryItem]:
        """Return foods expiring before ``before`` across all sections."""

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete a user's stored food; return whether a row was removed."""

    def delete_section_items(self, user_id: UUID, section_id: str) -> int:
        """Delete every food stored in a section and return how many."""


def expiry_after(days: int, now: datetime | None = None) -> datetime:
    """Return the 09:00 UTC expiry ``days`` after ``now``."""
    current = now or datetime.now(tz=UTC)
    return (current + timedelta(days=days)).replace(
        hour=EXPIRY_HOUR, minute=0, second=0, microsecond=0
    )


def days_left(item: InventoryItem, now: datetime | None = None) -> int:
    """Whole days until expiry, rounded up; negative once expired."""
    current = now or datetime.now(tz=UTC)
    remaining = (item.expires_at - current).total_seconds()
    return math.ceil(remaining / 86400)


@dataclass
class InventoryService:
    """Application service for stored foods."""

    repository: InventoryRepository
    default_shelf_life_days: int = 7

    def add_scanned_item(
        self,
        user_id: UUID,
        section_id: str,
        record: FoodRecord,
        barcode: str | None,
        now: datetime | None = None,
    ) -> InventoryItem:
        """Store a scanned food with its first-serving macros."""
        serving = record.serving
        payload: dict[str, object] = {
            "section_id": section_id,
            "name": record.name.strip() or "Food",
            "expires_at": expiry_after(self.default_shelf_life_days, now).isoformat(),
            "calories": serving.calories if serving else 0.0,
            "protein": serving.protein if serving else 0.0,
            "carbs": serving.carbohydrate if serving else 0.0,
            "fats": serving.fat if serving else 0.0,
            "barcode": normalize_barcode(barcode) if barcode else None,
        }
        item = self.repository.add_item(user_id, payload)
        _logger.info(
            "Stored scanned food: section=%s food_id=%s", section_id, record.food_id
        )
        return item

    def add_item(  # noqa: PLR0913
        self,
        user_id: UUID,
        section_id: str,
        name: str,
        expires_at: datetime,
        calories: float = 0.0,
        protein: float = 0.0,
        carbs: float = 0.0,
        fats: float = 0.0,
    ) -> InventoryItem:
        """Store a manually entered food."""
        trimmed = name.strip()
        if not trimmed:
            raise ValueError("Name required")
        return self.repository.add_item(
            user_id,
            {
                "section_id": section_id,
                "name": trimmed,
                "expires_at": expires_at.isoformat(),
                "calories": calories,
                "protein": protein,
                "carbs": carbs,
                "fats": fats,
                "barcode": None,
            },
        )

    def list_items(self, user_id: UUID, section_id: str) -> list[InventoryItem]:
        """Return a section's foods, soonest expiry first."""
        items = self.repository.list_items(user_id, section_id)
        return sorted(items, key=lambda item: item.expires_at)

    def remove_item(self, user_id: UUID, item_id: UUID) -> None:
        """Remove a stored food."""
        if not self.repository.delete_item(user_id, item_id):
            raise NotFoundError(f"Stored food {item_id} not found")

    def expiring_within(
        self, user_id: UUID, days: int, now: datetime | None = None
    ) -> list[InventoryItem]:
        """Return foods expiring in the next ``days`` days, soonest first."""
        current = now or datetime.now(tz=UTC)
        items = self.repository.list_expiring(user_id, current + timedelta(days=days))
        return sorted(items, key=lambda item: item.expires_at)
