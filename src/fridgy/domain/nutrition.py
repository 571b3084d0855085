"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Serving:
    """Macros for a single FatSecret serving."""

    calories: float
    protein: float
    fat: float
    carbohydrate: float
    description: str | None = None
    metric_amount: float | None = None
    metric_unit: str | None = None


@dataclass(frozen=True)
class FoodRecord:
    """Food details parsed from the FatSecret food endpoint."""

    food_id: str
    name: str
    serving: Serving | None
    brand_name: str | None = None
    food_type: str | None = None
    food_url: str | None = None
