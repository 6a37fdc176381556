"""Heuristic daily health assessment."""

import math

from health_tracker.domain.stats import DayAssessment, DayTotals

CALORIE_CEILING = 2500
PROTEIN_TARGET_G = 50
PROTEIN_FLOOR_G = 30
FIBER_TARGET_G = 25
FIBER_FLOOR_G = 15

_BMI_BANDS = (
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
)


def compute_bmi(weight_kg: float | None, height_cm: float | None) -> float | None:
    """Return BMI rounded to one decimal, or None without weight and height."""
    if not weight_kg or not height_cm or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return round(weight_kg / height_m**2, 1)


def bmi_status(bmi: float) -> str:
    """Return the WHO band label for a BMI value."""
    for upper, label in _BMI_BANDS:
        if bmi < upper:
            return label
    return "Obese"


def health_score(totals: DayTotals, fiber: int) -> int:
    """Score a day's intake from 0 to 100."""
    calorie_score = 1.0 if 0 < totals.calories <= CALORIE_CEILING else 0.5
    if totals.protein >= PROTEIN_TARGET_G:
        protein_score = 1.0
    elif totals.protein >= PROTEIN_FLOOR_G:
        protein_score = 0.7
    else:
        protein_score = 0.4
    if fiber >= FIBER_TARGET_G:
        fiber_score = 1.0
    elif fiber >= FIBER_FLOOR_G:
        fiber_score = 0.7
    else:
        fiber_score = 0.4
    macros = (totals.carbs, totals.fat, totals.protein)
    if all(value > 0 for value in macros):
        balance_score = 1.0
    elif any(value > 0 for value in macros):
        balance_score = 0.6
    else:
        balance_score = 0.0
    mean = (calorie_score + protein_score + fiber_score + balance_score) / 4
    # Half-up rounding; round() would send 52.5 to 52.
    return math.floor(mean * 100 + 0.5)


def suggestion(totals: DayTotals, fiber: int) -> str:
    """Return the single most relevant nutrition tip for the day."""
    if totals.calories == 0:
        return "Log your meals to get personalized recommendations"
    if totals.calories > CALORIE_CEILING:
        return "Calorie intake is high - consider portion control"
    if totals.protein < PROTEIN_TARGET_G:
        return "Increase protein intake for better muscle health"
    if fiber < FIBER_TARGET_G:
        return "Add more fiber-rich foods like vegetables and whole grains"
    if totals.carbs == 0 or totals.fat == 0:
        return "Ensure balanced macros for optimal health"
    return "Great job! Your nutrition looks balanced today"


def assess_day(
    totals: DayTotals,
    fiber: int,
    weight_kg: float | None,
    height_cm: float | None,
) -> DayAssessment:
    """Build the assessment shown alongside a day's summary."""
    bmi = compute_bmi(weight_kg, height_cm)
    return DayAssessment(
        bmi=bmi,
        bmi_status=bmi_status(bmi) if bmi is not None else None,
        health_score=health_score(totals, fiber),
        suggestion=suggestion(totals, fiber),
    )
