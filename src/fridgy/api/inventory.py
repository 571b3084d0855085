"""Sections, stored foods and grocery list endpoints with token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from fridgy.api.models import (  # noqa: TC001
    GroceryItemRequest,
    ManualItemRequest,
    ReorderRequest,
    ScannedItemRequest,
    SectionRequest,
)
from fridgy.services.inventory import days_left
from fridgy.services.sections import DEFAULT_SECTION_COLOR

if TYPE_CHECKING:
    from fridgy.containers import AppContainer
    from fridgy.domain.inventory import InventoryItem


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


router = APIRouter(
    prefix="/users/{user_id}",
    tags=["inventory"],
    dependencies=[Depends(require_api_token)],
)


@router.get("/sections")
async def list_sections(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a user's storage sections."""
    container: AppContainer = request.app.state.container
    return {"sections": container.section_service.list_sections(user_id)}


@router.post("/sections")
async def ensure_section(
    user_id: UUID, body: SectionRequest, request: Request
) -> dict[str, object]:
    """Return the named section, creating it when missing."""
    container: AppContainer = request.app.state.container
    section = container.section_service.ensure_section(
        user_id, body.name, body.color or DEFAULT_SECTION_COLOR
    )
    return {"section": section}


@router.delete("/sections/{section_id}")
async def delete_section(
    user_id: UUID, section_id: str, request: Request
) -> dict[str, object]:
    """Delete a section together with the foods stored in it."""
    container: AppContainer = request.app.state.container
    removed = container.section_service.delete_section(user_id, section_id)
    return {"status": "ok", "removed_items": removed}


@router.get("/sections/{section_id}/items")
async def list_items(
    user_id: UUID, section_id: str, request: Request
) -> dict[str, object]:
    """Return a section's foods with days left until expiry."""
    container: AppContainer = request.app.state.container
    items = container.inventory_service.list_items(user_id, section_id)
    return {"items": [_item_view(item) for item in items]}


@router.post("/sections/{section_id}/items")
async def add_item(
    user_id: UUID, section_id: str, body: ManualItemRequest, request: Request
) -> dict[str, object]:
    """Store a manually entered food."""
    container: AppContainer = request.app.state.container
    item = container.inventory_service.add_item(
        user_id,
        section_id,
        name=body.name,
        expires_at=body.expires_at,
        calories=body.calories,
        protein=body.protein,
        carbs=body.carbs,
        fats=body.fats,
    )
    return {"item": _item_view(item)}


@router.post("/sections/{section_id}/scans")
async def add_scanned_item(
    user_id: UUID, section_id: str, body: ScannedItemRequest, request: Request
) -> dict[str, object]:
    """Look up a barcode and store the food in a section."""
    container: AppContainer = request.app.state.container
    record = await container.nutrition_service.scan(
        body.barcode, body.region, body.language
    )
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No match for this barcode",
        )
    item = container.inventory_service.add_scanned_item(
        user_id, section_id, record, barcode=body.barcode
    )
    return {"item": _item_view(item), "food": record}


@router.delete("/items/{item_id}")
async def remove_item(
    user_id: UUID, item_id: UUID, request: Request
) -> dict[str, str]:
    """Remove a stored food."""
    container: AppContainer = request.app.state.container
    container.inventory_service.remove_item(user_id, item_id)
    return {"status": "ok"}


@router.get("/expiring")
async def expiring_items(
    user_id: UUID, request: Request, days: int = 3
) -> dict[str, object]:
    """Return foods expiring within ``days`` days."""
    container: AppContainer = request.app.state.container
    items = container.inventory_service.expiring_within(user_id, days)
    return {"items": [_item_view(item) for item in items]}


@router.get("/grocery")
async def list_grocery(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the grocery list in display order."""
    container: AppContainer = request.app.state.container
    return {"items": container.grocery_service.list_items(user_id)}


@router.post("/grocery")
async def add_grocery(
    user_id: UUID, body: GroceryItemRequest, request: Request
) -> dict[str, object]:
    """Append an item to the grocery list."""
    container: AppContainer = request.app.state.container
    return {"item": container.grocery_service.add_item(user_id, body.name, body.qty)}


@router.post("/grocery/{item_id}/toggle")
async def toggle_grocery(
    user_id: UUID, item_id: UUID, request: Request
) -> dict[str, object]:
    """Flip a grocery item's checked state."""
    container: AppContainer = request.app.state.container
    return {"item": container.grocery_service.toggle(user_id, item_id)}


@router.delete("/grocery/{item_id}")
async def remove_grocery(
    user_id: UUID, item_id: UUID, request: Request
) -> dict[str, str]:
    """Delete a grocery item."""
    container: AppContainer = request.app.state.container
    container.grocery_service.remove(user_id, item_id)
    return {"status": "ok"}


@router.put("/grocery/order")
async def reorder_grocery(
    user_id: UUID, body: ReorderRequest, request: Request
) -> dict[str, object]:
    """Apply a new display order to the grocery list."""
    container: AppContainer = request.app.state.container
    return {"items": container.grocery_service.reorder(user_id, body.ids)}


@router.post("/grocery/clear-checked")
async def clear_checked(user_id: UUID, request: Request) -> dict[str, int]:
    """Delete checked grocery items."""
    container: AppContainer = request.app.state.container
    return {"removed": container.grocery_service.clear_checked(user_id)}


def _item_view(item: InventoryItem) -> dict[str, object]:
    return {
        "id": item.id,
        "section_id": item.section_id,
        "name": item.name,
        "expires_at": item.expires_at,
        "days_left": days_left(item),
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fats": item.fats,
        "barcode": item.barcode,
    }
