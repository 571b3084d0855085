"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fridgy.adapters.fatsecret_client import HttpxFatSecretClient
from fridgy.adapters.supabase_grocery_repository import SupabaseGroceryRepository
from fridgy.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from fridgy.adapters.supabase_section_repository import SupabaseSectionRepository
from fridgy.config import FatSecretSettings, Settings, load_credential
from fridgy.services.cache import BoundedTtlCache
from fridgy.services.grocery import GroceryService
from fridgy.services.inventory import InventoryService
from fridgy.services.nutrition import NutritionService
from fridgy.services.sections import SectionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    section_service: SectionService
    inventory_service: InventoryService
    grocery_service: GroceryService
    close_resources: Callable[[], Awaitable[None]]


def build_nutrition_service(settings: FatSecretSettings) -> NutritionService:
    """Create the FatSecret-backed lookup service."""
    fatsecret_client = HttpxFatSecretClient.create(
        credential=load_credential(settings),
        barcode_url=settings.fatsecret_barcode_url,
        food_url=settings.fatsecret_food_url,
        auth_mode=settings.fatsecret_auth_mode,
        timeout_seconds=settings.lookup_timeout_seconds,
    )
    return NutritionService(
        client=fatsecret_client,
        cache=BoundedTtlCache(),
        region=settings.fatsecret_region,
        language=settings.fatsecret_language,
        debug=settings.environment == "local",
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    nutrition_service = build_nutrition_service(resolved_settings)
    inventory_repository = SupabaseInventoryRepository(supabase_client)
    section_service = SectionService(
        SupabaseSectionRepository(supabase_client), inventory_repository
    )
    inventory_service = InventoryService(
        repository=inventory_repository,
        default_shelf_life_days=resolved_settings.default_shelf_life_days,
    )
    grocery_service = GroceryService(SupabaseGroceryRepository(supabase_client))

    async def close_resources() -> None:
        client = nutrition_service.client
        if isinstance(client, HttpxFatSecretClient):
            await client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        section_service=section_service,
        inventory_service=inventory_service,
        grocery_service=grocery_service,
        close_resources=close_resources,
    )
