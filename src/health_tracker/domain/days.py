"""Domain models for daily entries and meals."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Fixed set of meal slots in a day, in display order."""

    BREAKFAST = "breakfast"
    MORNING_SNACK = "morning_snack"
    LUNCH = "lunch"
    EVENING_SNACK = "evening_snack"
    DINNER = "dinner"


ENTRY_FIELDS = (
    "weight",
    "steps",
    "walking_minutes",
    "strength_training",
    "strength_notes",
)

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat", "fiber")

# Column limits of the store: int4 counters and numeric(5,2) weight.
MAX_COUNT = 2**31 - 1
MAX_WEIGHT_KG = 1000


@dataclass(frozen=True)
class DailyEntry:
    """One user's record for one calendar date."""

    id: UUID
    user_id: str
    date: date
    weight: float | None = None
    steps: int = 0
    walking_minutes: int = 0
    strength_training: bool = False
    strength_notes: str | None = None
    created_at: date | None = None


@dataclass(frozen=True)
class Meal:
    """Logged food item owned by a daily entry."""

    id: UUID
    daily_entry_id: UUID
    meal_type: MealType
    description: str
    quantity: str | None = None
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0


@dataclass(frozen=True)
class DailyEntryWithMeals:
    """Daily entry together with its meals."""

    entry: DailyEntry
    meals: list[Meal] = field(default_factory=list)
