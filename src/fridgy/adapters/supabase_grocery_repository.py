"""Supabase implementation for the grocery list."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fridgy.domain.inventory import GroceryItem
from fridgy.services.grocery import GroceryRepository


@dataclass
class SupabaseGroceryRepository(GroceryRepository):
    """Supabase-backed repository for grocery items."""

    client: Client

    def list_items(self, user_id: UUID) -> list[GroceryItem]:
        response = (
            self.client.table("grocery_items")
            .select("*")
            .eq("user_id", str(user_id))
            .order("position")
            .execute()
        )
        return [_parse_grocery_item(row) for row in response.data or []]

    def get_item(self, user_id: UUID, item_id: UUID) -> GroceryItem | None:
        response = (
            self.client.table("grocery_items")
            .select("*")
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_grocery_item(response.data[0])

    def create_item(self, user_id: UUID, payload: dict[str, object]) -> GroceryItem:
        response = (
            self.client.table("grocery_items")
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create grocery item")
        return _parse_grocery_item(response.data[0])

    def update_item(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> GroceryItem:
        response = (
            self.client.table("grocery_items")
            .update(payload)
            .eq("id", str(item_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update grocery item")
        return _parse_grocery_item(response.data[0])

    def delete_items(self, user_id: UUID, item_ids: list[UUID]) -> int:
        response = (
            self.client.table("grocery_items")
            .delete()
            .eq("user_id", str(user_id))
            .in_("id", [str(item_id) for item_id in item_ids])
            .execute()
        )
        return len(response.data or [])


def _parse_grocery_item(row: dict[str, object]) -> GroceryItem:
    return GroceryItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        qty=row.get("qty"),
        checked=bool(row.get("checked", False)),
        position=int(row.get("position", 0)),
    )
