"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from fridgy.oauth.signature import Credential

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class FatSecretSettings(BaseSettings):
    """FatSecret lookup settings loaded from environment variables."""

    fatsecret_consumer_key: str = ""
    fatsecret_consumer_secret: str = ""
    fatsecret_barcode_url: str = (
        "https://platform.fatsecret.com/rest/food/barcode/find-by-id/v1"
    )
    fatsecret_food_url: str = "https://platform.fatsecret.com/rest/food/v4"
    fatsecret_region: str = "US"
    fatsecret_language: str | None = None
    fatsecret_auth_mode: Literal["query", "header"] = "query"
    lookup_timeout_seconds: float = 7.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


class Settings(FatSecretSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    default_shelf_life_days: int = 7


def load_credential(settings: FatSecretSettings) -> Credential:
    """Build the FatSecret credential once from settings."""
    credential = Credential(
        consumer_key=settings.fatsecret_consumer_key.strip(),
        consumer_secret=settings.fatsecret_consumer_secret.strip(),
    )
    credential.require()
    return credential
