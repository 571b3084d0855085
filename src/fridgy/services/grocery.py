"""Services for the shared grocery list."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridgy.domain.inventory import GroceryItem
from fridgy.errors import NotFoundError


class GroceryRepository(Protocol):
    """Persistence interface for grocery items."""

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        """Return a user's grocery items."""

    def get_item(self, user_id: UUID, item_id: UUID) -> GroceryItem | None:
        """Return a user's grocery item by id, if present."""

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> GroceryItem:
        """Create a grocery item and return it."""

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> GroceryItem:
        """Update a user's grocery item and return it."""

    def delete_items(self, user_id: UUID, item_ids: list[UUID]) -> int:
        """Delete a user's grocery items and return how many were removed."""


@dataclass
class GroceryService:
    """Application service for grocery list operations."""

    repository: GroceryRepository

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        """Return the list in display order."""
        return sorted(self.repository.list_items(user_id), key=lambda i: i.position)

    def add_item(
        self, user_id: UUID, name: str, qty: str | None = None
    ) -> GroceryItem:
        """Append an item to the end of the list."""
        trimmed = name.strip()
        if not trimmed:
            raise ValueError("Item name is required")
        items = self.repository.list_items(user_id)
        position = max((item.position for item in items), default=-1) + 1
        return self.repository.create_item(
            user_id,
            {
                "name": trimmed,
                "qty": (qty or "").strip() or None,
                "checked": False,
                "position": position,
            },
        )

    def toggle(self, user_id: UUID, item_id: UUID) -> GroceryItem:
        """Flip an item's checked state."""
        item = self.repository.get_item(user_id, item_id)
        if item is None:
            raise NotFoundError(f"Grocery item {item_id} not found")
        return self.repository.update_item(
            user_id, item_id, {"checked": not item.checked}
        )

    def remove(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an item."""
        if not self.repository.delete_items(user_id, [item_id]):
            raise NotFoundError(f"Grocery item {item_id} not found")

    def reorder(self, user_id: UUID, ordered_ids: list[UUID]) -> list[GroceryItem]:
        """Rewrite positions to follow ``ordered_ids``."""
        items = {item.id: item for item in self.repository.list_items(user_id)}
        requested = set(ordered_ids)
        if not requested.issubset(items) or len(requested) != len(ordered_ids):
            raise ValueError("Reorder ids must be distinct items from this list")
        # Items left out of ordered_ids keep their relative order after the rest.
        remaining = [
            item_id
            for item_id in sorted(items, key=lambda i: items[i].position)
            if item_id not in requested
        ]
        reordered: list[GroceryItem] = []
        for position, item_id in enumerate([*ordered_ids, *remaining]):
            item = items[item_id]
            if item.position != position:
                item = self.repository.update_item(
                    user_id, item_id, {"position": position}
                )
            reordered.append(item)
        return reordered

    def clear_checked(self, user_id: UUID) -> int:
        """Delete every checked item and return how many were removed."""
        items = self.repository.list_items(user_id)
        checked = [item.id for item in items if item.checked]
        if checked:
            self.repository.delete_items(user_id, checked)
        return len(checked)
