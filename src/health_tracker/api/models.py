"""Pydantic request and response models for the tracker API."""

import re
from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from health_tracker.domain.days import (
    MAX_COUNT,
    MAX_WEIGHT_KG,
    DailyEntry,
    DailyEntryWithMeals,
    Meal,
    MealType,
)
from health_tracker.domain.nutrition import NutritionEstimate
from health_tracker.domain.stats import DaySummary, TrendPoint

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class CamelModel(BaseModel):
    """Base model using camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _EntryFields(CamelModel):
    weight: float | None = Field(default=None, gt=0, lt=MAX_WEIGHT_KG)
    steps: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    walking_minutes: int | None = Field(default=None, ge=0, le=MAX_COUNT)
    strength_training: bool | None = None
    strength_notes: str | None = None


class CreateDayRequest(_EntryFields):
    """Create a day; only the date is required."""

    date: date

    @field_validator("date", mode="before")
    @classmethod
    def _require_iso_date(cls, value: object) -> object:
        # Lax date parsing would take unix timestamps and datetime strings.
        if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
            raise ValueError("Date must be formatted as YYYY-MM-DD")
        return value


class UpdateDayRequest(_EntryFields):
    """Partial update of a day's mutable fields."""

    model_config = ConfigDict(extra="forbid")


class CreateMealRequest(CamelModel):
    """Meal fields; the owning day comes from the path."""

    meal_type: MealType
    description: str = Field(min_length=1)
    quantity: str | None = None
    calories: int = Field(default=0, ge=0, le=MAX_COUNT)
    protein: int = Field(default=0, ge=0, le=MAX_COUNT)
    carbs: int = Field(default=0, ge=0, le=MAX_COUNT)
    fat: int = Field(default=0, ge=0, le=MAX_COUNT)
    fiber: int = Field(default=0, ge=0, le=MAX_COUNT)


class NutritionLookupRequest(CamelModel):
    """Food to estimate nutrients for."""

    description: str = Field(min_length=1)
    quantity: str | None = None


class MealResponse(CamelModel):
    """Meal as returned to clients."""

    id: UUID
    daily_entry_id: UUID
    meal_type: MealType
    description: str
    quantity: str | None
    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int

    @classmethod
    def from_domain(cls, meal: Meal) -> "MealResponse":
        """Build from a domain meal."""
        return cls(
            id=meal.id,
            daily_entry_id=meal.daily_entry_id,
            meal_type=meal.meal_type,
            description=meal.description,
            quantity=meal.quantity,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            fiber=meal.fiber,
        )


class DailyEntryResponse(CamelModel):
    """Daily entry without meals."""

    id: UUID
    user_id: str
    date: date
    weight: float | None
    steps: int
    walking_minutes: int
    strength_training: bool
    strength_notes: str | None
    created_at: date | None

    @classmethod
    def from_domain(cls, entry: DailyEntry) -> "DailyEntryResponse":
        """Build from a domain entry."""
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            date=entry.date,
            weight=entry.weight,
            steps=entry.steps,
            walking_minutes=entry.walking_minutes,
            strength_training=entry.strength_training,
            strength_notes=entry.strength_notes,
            created_at=entry.created_at,
        )


class DayDetailResponse(DailyEntryResponse):
    """Daily entry with its meals."""

    meals: list[MealResponse]

    @classmethod
    def from_detail(cls, detail: DailyEntryWithMeals) -> "DayDetailResponse":
        """Build from an entry with meals."""
        base = DailyEntryResponse.from_domain(detail.entry)
        return cls(
            **base.model_dump(),
            meals=[MealResponse.from_domain(meal) for meal in detail.meals],
        )


class TrendPointResponse(CamelModel):
    """One point of the trend series."""

    date: date
    weight: float | None
    calories: int
    protein: int

    @classmethod
    def from_domain(cls, point: TrendPoint) -> "TrendPointResponse":
        """Build from a domain trend point."""
        return cls(
            date=point.date,
            weight=point.weight,
            calories=point.calories,
            protein=point.protein,
        )


class DayTotalsResponse(CamelModel):
    """Summed macros for a day."""

    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int


class AssessmentResponse(CamelModel):
    """BMI and health score for a day."""

    bmi: float | None
    bmi_status: str | None
    health_score: int
    suggestion: str


class DaySummaryResponse(CamelModel):
    """Day with totals, grouped meals and assessment."""

    entry: DailyEntryResponse
    totals: DayTotalsResponse
    meals_by_type: dict[MealType, list[MealResponse]]
    assessment: AssessmentResponse

    @classmethod
    def from_domain(cls, summary: DaySummary) -> "DaySummaryResponse":
        """Build from a domain summary."""
        return cls(
            entry=DailyEntryResponse.from_domain(summary.entry),
            totals=DayTotalsResponse(
                calories=summary.totals.calories,
                protein=summary.totals.protein,
                carbs=summary.totals.carbs,
                fat=summary.totals.fat,
                fiber=summary.fiber,
            ),
            meals_by_type={
                meal_type: [MealResponse.from_domain(meal) for meal in meals]
                for meal_type, meals in summary.groups.items()
            },
            assessment=AssessmentResponse(
                bmi=summary.assessment.bmi,
                bmi_status=summary.assessment.bmi_status,
                health_score=summary.assessment.health_score,
                suggestion=summary.assessment.suggestion,
            ),
        )


class NutritionEstimateResponse(CamelModel):
    """Estimated nutrients."""

    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int

    @classmethod
    def from_domain(cls, estimate: NutritionEstimate) -> "NutritionEstimateResponse":
        """Build from a domain estimate."""
        return cls(
            calories=estimate.calories,
            protein=estimate.protein,
            carbs=estimate.carbs,
            fat=estimate.fat,
            fiber=estimate.fiber,
        )
