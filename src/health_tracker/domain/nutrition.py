"""Nutrition estimate domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionEstimate:
    """Estimated nutrients for a described food portion."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0
