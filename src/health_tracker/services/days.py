"""Day lifecycle service: one entry per user and date, with meals."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from pydantic.alias_generators import to_camel

from health_tracker.domain.days import (
    ENTRY_FIELDS,
    MAX_COUNT,
    MAX_WEIGHT_KG,
    NUTRIENT_FIELDS,
    DailyEntry,
    DailyEntryWithMeals,
    Meal,
    MealType,
)
from health_tracker.domain.stats import DaySummary, TrendPoint
from health_tracker.errors import ConflictError, NotFoundError, ValidationError
from health_tracker.services.aggregation import (
    compute_day_totals,
    compute_fiber_total,
    compute_trends,
    group_meals_by_type,
)
from health_tracker.services.assessment import assess_day

_logger = logging.getLogger(__name__)


class DayRepository(Protocol):
    """Persistence interface for daily entries and meals."""

    def list_entries(self, user_id: str) -> list[DailyEntry]:
        """Return a user's entries, newest date first."""

    def get_entry(self, user_id: str, day: date) -> DailyEntry | None:
        """Return the entry for a user and date, if present."""

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        """Return an entry by id, if present."""

    def insert_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry:
        """Insert an entry, raising ConflictError if (user, date) is taken."""

    def update_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry | None:
        """Patch an entry and return it, or None when absent."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""

    def list_meals(self, entry_ids: list[UUID]) -> list[Meal]:
        """Return meals belonging to any of the entries, oldest first per entry."""

    def insert_meal(self, entry_id: UUID, fields: dict[str, object]) -> Meal:
        """Insert a meal under an entry and return it."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id, if present."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""

    def delete_meals_for_entry(self, entry_id: UUID) -> None:
        """Delete every meal owned by an entry."""


@dataclass
class DayService:
    """Service for day-scoped reads and writes.

    Every operation is scoped by an opaque, already authenticated user id.
    """

    repository: DayRepository
    enforce_meal_ownership: bool = True

    def list_entries(self, user_id: str) -> list[DailyEntry]:
        """Return the user's entries, newest first."""
        return self.repository.list_entries(user_id)

    def get_entry(self, user_id: str, day: date) -> DailyEntryWithMeals | None:
        """Return the entry with meals, or None when the day is not logged."""
        entry = self.repository.get_entry(user_id, day)
        if entry is None:
            return None
        return self._with_meals(entry)

    def create_entry(
        self, user_id: str, day: date, fields: dict[str, object] | None = None
    ) -> DailyEntryWithMeals:
        """Create the day, or return the existing one unchanged."""
        return self._get_or_create(user_id, day, _clean_entry_fields(fields or {}))

    def update_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntryWithMeals:
        """Apply a partial update to an existing day."""
        patch = _clean_entry_fields(fields)
        if patch:
            updated = self.repository.update_entry(user_id, day, patch)
        else:
            updated = self.repository.get_entry(user_id, day)
        if updated is None:
            raise NotFoundError("Entry not found")
        return self._with_meals(updated)

    def delete_entry(self, user_id: str, day: date) -> None:
        """Delete a day and all of its meals; absent days are ignored."""
        entry = self.repository.get_entry(user_id, day)
        if entry is None:
            return
        self.repository.delete_meals_for_entry(entry.id)
        self.repository.delete_entry(entry.id)

    def add_meal(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> tuple[DailyEntryWithMeals, Meal]:
        """Log a meal, creating the day first if needed.

        Returns the refreshed day and the inserted meal, which is always
        part of the day's meal list.
        """
        payload = _clean_meal_fields(fields)
        resolved = self._get_or_create(user_id, day, {})
        meal = self.repository.insert_meal(resolved.entry.id, payload)
        return self._with_meals(resolved.entry), meal

    def delete_meal(self, user_id: str, meal_id: UUID) -> None:
        """Delete a meal the user owns; unknown or foreign meals are ignored."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            return
        if self.enforce_meal_ownership:
            owner = self.repository.get_entry_by_id(meal.daily_entry_id)
            if owner is None or owner.user_id != user_id:
                _logger.warning(
                    "Refused to delete meal owned by another user",
                    extra={"meal_id": str(meal_id)},
                )
                return
        self.repository.delete_meal(meal_id)

    def get_trends(self, user_id: str) -> list[TrendPoint]:
        """Return the user's trend series in ascending date order."""
        entries = self.repository.list_entries(user_id)
        if not entries:
            return []
        by_entry: dict[UUID, list[Meal]] = defaultdict(list)
        for meal in self.repository.list_meals([entry.id for entry in entries]):
            by_entry[meal.daily_entry_id].append(meal)
        return compute_trends(
            DailyEntryWithMeals(entry=entry, meals=by_entry[entry.id])
            for entry in entries
        )

    def get_summary(
        self, user_id: str, day: date, height_cm: float | None = None
    ) -> DaySummary | None:
        """Return totals, grouped meals and an assessment for a day."""
        detail = self.get_entry(user_id, day)
        if detail is None:
            return None
        totals = compute_day_totals(detail.meals)
        fiber = compute_fiber_total(detail.meals)
        return DaySummary(
            entry=detail.entry,
            totals=totals,
            fiber=fiber,
            groups=group_meals_by_type(detail.meals),
            assessment=assess_day(totals, fiber, detail.entry.weight, height_cm),
        )

    def _get_or_create(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntryWithMeals:
        existing = self.repository.get_entry(user_id, day)
        if existing is not None:
            return self._with_meals(existing)
        try:
            created = self.repository.insert_entry(user_id, day, fields)
        except ConflictError:
            # Lost a concurrent insert; the unique (user_id, date) row wins.
            winner = self.repository.get_entry(user_id, day)
            if winner is None:
                raise
            _logger.info("Resolved concurrent day creation for %s", day.isoformat())
            return self._with_meals(winner)
        _logger.info("Created day %s", day.isoformat())
        return DailyEntryWithMeals(entry=created, meals=[])

    def _with_meals(self, entry: DailyEntry) -> DailyEntryWithMeals:
        return DailyEntryWithMeals(
            entry=entry, meals=self.repository.list_meals([entry.id])
        )


def _clean_entry_fields(fields: dict[str, object]) -> dict[str, object]:
    cleaned: dict[str, object] = {}
    for key, value in fields.items():
        if key not in ENTRY_FIELDS:
            raise ValidationError(f"Unknown field: {key}", field=to_camel(key))
        if key in {"steps", "walking_minutes"}:
            cleaned[key] = _non_negative_int(key, value)
        elif key == "weight":
            cleaned[key] = _weight(value)
        elif key == "strength_training":
            if value is None:
                value = False
            if not isinstance(value, bool):
                raise ValidationError("Expected a boolean", field=to_camel(key))
            cleaned[key] = value
        else:
            cleaned[key] = None if value is None else str(value)
    return cleaned


def _clean_meal_fields(fields: dict[str, object]) -> dict[str, object]:
    raw_type = fields.get("meal_type")
    try:
        meal_type = MealType(raw_type)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid meal type: {raw_type}", field="mealType"
        ) from exc
    description = fields.get("description")
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("Description is required", field="description")
    quantity = fields.get("quantity")
    cleaned: dict[str, object] = {
        "meal_type": meal_type,
        "description": description.strip(),
        "quantity": str(quantity) if quantity else None,
    }
    for key in NUTRIENT_FIELDS:
        cleaned[key] = _non_negative_int(key, fields.get(key))
    return cleaned


def _non_negative_int(key: str, value: object) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Expected an integer", field=to_camel(key))
    if value < 0:
        raise ValidationError("Must not be negative", field=to_camel(key))
    if value > MAX_COUNT:
        raise ValidationError("Value is too large", field=to_camel(key))
    return value


def _weight(value: object) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ValidationError("Expected a number", field="weight")
    if value <= 0:
        raise ValidationError("Must be positive", field="weight")
    if value >= MAX_WEIGHT_KG:
        raise ValidationError("Value is too large", field="weight")
    return float(value)
