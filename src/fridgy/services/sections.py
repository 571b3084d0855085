"""Services for user storage sections."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridgy.domain.inventory import Section
from fridgy.errors import NotFoundError
from fridgy.services.inventory import InventoryRepository

DEFAULT_SECTION_COLOR = "#2D2D2D"

_logger = logging.getLogger(__name__)

_SLUG_DROP = re.compile(r"[^a-z0-9\s-]")
_SLUG_SPACES = re.compile(r"\s+")


class SectionRepository(Protocol):
    """Persistence interface for sections."""

    def list_sections(self, user_id: UUID) -> list[Section]:
        """Return every section owned by a user."""

    def create_section(
        self, user_id: UUID, section_id: str, name: str, color: str
    ) -> Section:
        """Create a section and return it."""

    def delete_section(self, user_id: UUID, section_id: str) -> None:
        """Delete a user's section."""


def section_slug(name: str) -> str:
    """Derive a section id from its display name."""
    lowered = _SLUG_DROP.sub("", name.strip().lower())
    return _SLUG_SPACES.sub("-", lowered)


@dataclass
class SectionService:
    """Application service for section operations."""

    repository: SectionRepository
    inventory_repository: InventoryRepository

    def list_sections(self, user_id: UUID) -> list[Section]:
        """Return a user's sections."""
        return self.repository.list_sections(user_id)

    def ensure_section(
        self, user_id: UUID, name: str, color: str = DEFAULT_SECTION_COLOR
    ) -> Section:
        """Return the section named ``name``, creating it when missing.

        Names match case-insensitively. New ids are slugs of the name, with a
        numeric suffix when the slug is already taken.
        """
        trimmed = name.strip()
        if not trimmed:
            raise ValueError("Section name is required")
        sections = self.repository.list_sections(user_id)
        for section in sections:
            if section.name.strip().lower() == trimmed.lower():
                return section

        taken = {section.id for section in sections}
        base = section_slug(trimmed) or "section"
        section_id = base
        suffix = 2
        while section_id in taken:
            section_id = f"{base}-{suffix}"
            suffix += 1
        return self.repository.create_section(user_id, section_id, trimmed, color)

    def delete_section(self, user_id: UUID, section_id: str) -> int:
        """Delete a section and every food stored in it.

        Returns the number of foods removed with the section.
        """
        if not any(s.id == section_id for s in self.repository.list_sections(user_id)):
            raise NotFoundError(f"Section {section_id} not found")
        removed = self.inventory_repository.delete_section_items(user_id, section_id)
        self.repository.delete_section(user_id, section_id)
        _logger.info("Deleted section: section=%s items=%d", section_id, removed)
        return removed
