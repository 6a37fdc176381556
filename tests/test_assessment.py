"""Tests for the daily health assessment."""

from health_tracker.domain.stats import DayTotals
from health_tracker.services.assessment import (
    assess_day,
    bmi_status,
    compute_bmi,
    health_score,
    suggestion,
)


def test_compute_bmi_requires_weight_and_height() -> None:
    assert compute_bmi(None, 180) is None
    assert compute_bmi(80, None) is None
    assert compute_bmi(80, 0) is None
    assert compute_bmi(80, 200) == 20.0


def test_bmi_status_bands() -> None:
    assert bmi_status(17.9) == "Underweight"
    assert bmi_status(18.5) == "Normal"
    assert bmi_status(27.0) == "Overweight"
    assert bmi_status(31.2) == "Obese"


def test_health_score_partial_day() -> None:
    # 1 calories + 0.4 protein + 0.4 fiber + 0.6 balance
    assert health_score(DayTotals(calories=1000, carbs=100), fiber=0) == 60


def test_health_score_balanced_day() -> None:
    totals = DayTotals(calories=2000, protein=80, carbs=220, fat=60)

    assert health_score(totals, fiber=30) == 100


def test_suggestion_priorities() -> None:
    assert suggestion(DayTotals(), 0).startswith("Log your meals")
    assert "portion" in suggestion(DayTotals(calories=3000, protein=90), 30)
    assert "protein" in suggestion(DayTotals(calories=1500, protein=20), 30)
    assert "fiber" in suggestion(DayTotals(calories=1500, protein=60), 10)
    assert "balanced macros" in suggestion(
        DayTotals(calories=1500, protein=60, carbs=0, fat=10), 30
    )
    assert suggestion(
        DayTotals(calories=1800, protein=60, carbs=200, fat=50), 30
    ).startswith("Great job")


def test_assess_day_without_height() -> None:
    assessment = assess_day(DayTotals(calories=800, protein=40), 0, 70.0, None)

    assert assessment.bmi is None
    assert assessment.bmi_status is None
    assert 0 <= assessment.health_score <= 100
