"""Supabase implementation for stored foods."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fridgy.domain.inventory import InventoryItem
from fridgy.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository for stored foods."""

    client: Client

    def add_item(self, user_id: UUID, payload: dict[str, object]) -> InventoryItem:
        """Insert a stored food and return it."""
        response = (
            self.client.table("inventory_items")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to store food")
        return _parse_item(response.data[0])

    def list_items(self, user_id: UUID, section_id: str) -> list[InventoryItem]:
        """Return the foods stored in one section."""
        response = (
            self.client.table("inventory_items")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("section_id", section_id)
            .order("expires_at")
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_expiring(self, user_id: UUID, before: datetime) -> list[InventoryItem]:
        """Return foods expiring before a cutoff."""
        response = (
            self.client.table("inventory_items")
            .select("*")
            .eq("user_id", str(user_id))
            .lt("expires_at", before.isoformat())
            .order("expires_at")
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def delete_item(self, user_id: UUID, item_id: UUID) -> bool:
        """Delete a stored food owned by the user."""
        response = (
            self.client.table("inventory_items")
            .delete()
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def delete_section_items(self, user_id: UUID, section_id: str) -> int:
        """Delete every food in a section."""
        response = (
            self.client.table("inventory_items")
            .delete()
            .eq("user_id", str(user_id))
            .eq("section_id", section_id)
            .execute()
        )
        return len(response.data or [])


def _parse_item(row: dict[str, object]) -> InventoryItem:
    """Parse an inventory row into a domain model."""
    added_raw = row.get("added_at")
    return InventoryItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        section_id=str(row["section_id"]),
        name=str(row.get("name", "")),
        expires_at=datetime.fromisoformat(str(row["expires_at"])),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fats=float(row.get("fats") or 0.0),
        barcode=row.get("barcode"),
        added_at=(
            datetime.fromisoformat(added_raw)
            if isinstance(added_raw, str) and added_raw
            else None
        ),
    )
