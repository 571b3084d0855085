"""Barcode and food lookups against FatSecret."""

import logging
from dataclasses import dataclass

from fridgy.adapters.fatsecret_client import FatSecretClient
from fridgy.domain.barcodes import normalize_barcode
from fridgy.domain.nutrition import FoodRecord, Serving
from fridgy.errors import ParseError, ProviderError
from fridgy.services.cache import Cache, lookup_key

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service for FatSecret lookups with caching."""

    client: FatSecretClient
    cache: Cache
    region: str = "US"
    language: str | None = None
    food_id_ttl_seconds: int = 86400
    food_ttl_seconds: int = 86400
    debug: bool = False

    async def lookup_food_identifier(
        self, barcode: str, region: str | None = None, language: str | None = None
    ) -> str | None:
        """Return the FatSecret food id for a scanned barcode, or None."""
        gtin = normalize_barcode(barcode)
        region, language = self._locale(region, language)
        cache_key = lookup_key("barcode", gtin, region, language)
        cached = self.cache.get(cache_key)
        if isinstance(cached, str):
            return cached

        payload = await self.client.find_id_for_barcode(gtin, region, language)
        food_id = parse_food_id(payload)
        if food_id is None:
            if self.debug:
                _logger.info("No FatSecret match: barcode=%s region=%s", gtin, region)
            return None
        self.cache.set(cache_key, food_id, ttl_seconds=self.food_id_ttl_seconds)
        if self.debug:
            _logger.info(
                "FatSecret barcode match: barcode=%s food_id=%s", gtin, food_id
            )
        return food_id

    async def lookup_food_details(
        self, food_id: str, region: str | None = None, language: str | None = None
    ) -> FoodRecord:
        """Retrieve a food with its first serving from FatSecret."""
        region, language = self._locale(region, language)
        cache_key = lookup_key("food", food_id, region, language)
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodRecord):
            return cached

        payload = await self.client.get_food(food_id, region, language)
        record = parse_food_record(payload)
        self.cache.set(cache_key, record, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("FatSecret food: food_id=%s name=%s", food_id, record.name)
        return record

    async def scan(
        self, barcode: str, region: str | None = None, language: str | None = None
    ) -> FoodRecord | None:
        """Resolve a scanned barcode to full food details."""
        food_id = await self.lookup_food_identifier(barcode, region, language)
        if food_id is None:
            return None
        return await self.lookup_food_details(food_id, region, language)

    def _locale(
        self, region: str | None, language: str | None
    ) -> tuple[str, str | None]:
        return region or self.region, language or self.language


def parse_food_id(payload: dict[str, object]) -> str | None:
    """Extract a non-zero food id from a barcode lookup response."""
    _raise_provider_error(payload)
    raw = payload.get("food_id")
    if isinstance(raw, dict):
        raw = raw.get("value")
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, str | int):
        raise ParseError(f"Unexpected food_id value: {raw!r}")
    value = str(raw).strip()
    if not value.strip("0"):
        return None
    return value


def parse_food_record(payload: dict[str, object]) -> FoodRecord:
    """Parse a food details response, keeping only the first serving."""
    _raise_provider_error(payload)
    food = payload.get("food")
    if not isinstance(food, dict):
        raise ParseError("Food response is missing the food object")
    food_id = food.get("food_id")
    if food_id is None or isinstance(food_id, dict | list):
        raise ParseError("Food response is missing food_id")

    servings = food.get("servings")
    raw_serving = servings.get("serving") if isinstance(servings, dict) else None
    if isinstance(raw_serving, list):
        raw_serving = raw_serving[0] if raw_serving else None
    if raw_serving is not None and not isinstance(raw_serving, dict):
        raise ParseError("Serving must be an object or a list of objects")

    return FoodRecord(
        food_id=str(food_id),
        name=str(food.get("food_name") or ""),
        serving=_parse_serving(raw_serving) if raw_serving else None,
        brand_name=_optional_str(food.get("brand_name")),
        food_type=_optional_str(food.get("food_type")),
        food_url=_optional_str(food.get("food_url")),
    )


def _parse_serving(raw: dict[str, object]) -> Serving:
    carbohydrate = raw.get("carbohydrate")
    if carbohydrate is None:
        carbohydrate = raw.get("carbs")
    metric_amount = raw.get("metric_serving_amount")
    return Serving(
        calories=_number(raw.get("calories"), "calories"),
        protein=_number(raw.get("protein"), "protein"),
        fat=_number(raw.get("fat"), "fat"),
        carbohydrate=_number(carbohydrate, "carbohydrate"),
        description=_optional_str(raw.get("serving_description")),
        metric_amount=(
            _number(metric_amount, "metric_serving_amount")
            if metric_amount not in (None, "")
            else None
        ),
        metric_unit=_optional_str(raw.get("metric_serving_unit")),
    )


def _number(value: object, field_name: str) -> float:
    """Convert a FatSecret numeric string; missing values count as zero."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ParseError(f"Serving {field_name} is not numeric: {value!r}")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Serving {field_name} is not numeric: {value!r}") from exc


def _optional_str(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _raise_provider_error(payload: dict[str, object]) -> None:
    """Raise ProviderError when the response carries an error object."""
    error = payload.get("error")
    if error is None:
        return
    if not isinstance(error, dict):
        raise ParseError(f"Unexpected error value: {error!r}")
    try:
        code = int(error.get("code"))  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Unexpected error code: {error.get('code')!r}") from exc
    raise ProviderError(code=code, message=str(error.get("message", "")))
