"""Pure aggregation over meal rows.

Nothing here touches storage. Totals and trend points are recomputed from the
fetched rows on every read and never persisted.
"""

from collections.abc import Iterable

from health_tracker.domain.days import DailyEntryWithMeals, Meal, MealType
from health_tracker.domain.stats import DayTotals, TrendPoint


def compute_day_totals(meals: Iterable[Meal]) -> DayTotals:
    """Sum calories, protein, carbs and fat across a day's meals.

    Fiber is tracked per meal but is not part of the day totals.
    """
    total = DayTotals()
    for meal in meals:
        total = DayTotals(
            calories=total.calories + _amount(meal.calories),
            protein=total.protein + _amount(meal.protein),
            carbs=total.carbs + _amount(meal.carbs),
            fat=total.fat + _amount(meal.fat),
        )
    return total


def compute_fiber_total(meals: Iterable[Meal]) -> int:
    """Sum fiber across a day's meals."""
    return sum(_amount(meal.fiber) for meal in meals)


def compute_trends(entries: Iterable[DailyEntryWithMeals]) -> list[TrendPoint]:
    """Return one trend point per entry in ascending date order."""
    points = []
    for item in sorted(entries, key=lambda item: item.entry.date):
        totals = compute_day_totals(item.meals)
        weight = item.entry.weight
        points.append(
            TrendPoint(
                date=item.entry.date,
                weight=float(weight) if weight is not None else None,
                calories=totals.calories,
                protein=totals.protein,
            )
        )
    return points


def group_meals_by_type(meals: Iterable[Meal]) -> dict[MealType, list[Meal]]:
    """Partition meals into the fixed meal-type buckets.

    Every bucket is present, in display order, even when empty.
    """
    groups: dict[MealType, list[Meal]] = {meal_type: [] for meal_type in MealType}
    for meal in meals:
        groups[MealType(meal.meal_type)].append(meal)
    return groups


def _amount(value: int | None) -> int:
    return value or 0
