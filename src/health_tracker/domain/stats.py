"""Domain models for derived day and trend figures."""

from dataclasses import dataclass
from datetime import date

from health_tracker.domain.days import DailyEntry, Meal, MealType


@dataclass(frozen=True)
class DayTotals:
    """Summed macros for one day."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0


@dataclass(frozen=True)
class TrendPoint:
    """One date's weight and intake used for charting."""

    date: date
    weight: float | None
    calories: int
    protein: int


@dataclass(frozen=True)
class DayAssessment:
    """BMI and heuristic health score for a day."""

    bmi: float | None
    bmi_status: str | None
    health_score: int
    suggestion: str


@dataclass(frozen=True)
class DaySummary:
    """Entry with totals, grouped meals and an assessment."""

    entry: DailyEntry
    totals: DayTotals
    fiber: int
    groups: dict[MealType, list[Meal]]
    assessment: DayAssessment
