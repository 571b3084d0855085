"""Supabase implementation for storage sections."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fridgy.domain.inventory import Section
from fridgy.services.sections import SectionRepository


@dataclass
class SupabaseSectionRepository(SectionRepository):
    """Supabase-backed repository for sections."""

    client: Client

    def list_sections(self, user_id: UUID) -> list[Section]:
        """Return a user's sections in creation order."""
        response = (
            self.client.table("sections")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at")
            .execute()
        )
        return [_parse_section(row) for row in response.data or []]

    def create_section(
        self, user_id: UUID, section_id: str, name: str, color: str
    ) -> Section:
        """Create a section and return it."""
        response = (
            self.client.table("sections")
            .insert(
                {
                    "id": section_id,
                    "user_id": str(user_id),
                    "name": name,
                    "color": color,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create section")
        return _parse_section(response.data[0])

    def delete_section(self, user_id: UUID, section_id: str) -> None:
        """Delete a section owned by the user."""
        (
            self.client.table("sections")
            .delete()
            .eq("user_id", str(user_id))
            .eq("id", section_id)
            .execute()
        )


def _parse_section(row: dict[str, object]) -> Section:
    created_raw = row.get("created_at")
    return Section(
        id=str(row["id"]),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        color=str(row.get("color", "")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
