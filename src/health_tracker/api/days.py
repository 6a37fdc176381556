"""Day, meal and trend endpoints scoped by the caller's identity."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, Response, status

from health_tracker.api.identity import require_user
from health_tracker.api.models import (
    CreateDayRequest,
    CreateMealRequest,
    DailyEntryResponse,
    DayDetailResponse,
    DaySummaryResponse,
    MealResponse,
    TrendPointResponse,
    UpdateDayRequest,
)
from health_tracker.errors import NotFoundError

if TYPE_CHECKING:
    from health_tracker.services.days import DayService

router = APIRouter(prefix="/api", tags=["days"])


def _day_service(request: Request) -> DayService:
    return request.app.state.container.day_service


@router.get("/days", response_model=list[DailyEntryResponse])
async def list_days(
    request: Request, user_id: str = Depends(require_user)
) -> list[DailyEntryResponse]:
    """Return the caller's days, newest first."""
    entries = _day_service(request).list_entries(user_id)
    return [DailyEntryResponse.from_domain(entry) for entry in entries]


@router.get("/days/{day}", response_model=DayDetailResponse)
async def get_day(
    day: date, request: Request, user_id: str = Depends(require_user)
) -> DayDetailResponse:
    """Return a day with its meals."""
    detail = _day_service(request).get_entry(user_id, day)
    if detail is None:
        raise NotFoundError("Daily entry not found")
    return DayDetailResponse.from_detail(detail)


@router.post(
    "/days", response_model=DayDetailResponse, status_code=status.HTTP_201_CREATED
)
async def create_day(
    payload: CreateDayRequest, request: Request, user_id: str = Depends(require_user)
) -> DayDetailResponse:
    """Create a day, or return the existing one for that date."""
    fields = payload.model_dump(exclude_unset=True, exclude={"date"})
    detail = _day_service(request).create_entry(user_id, payload.date, fields)
    return DayDetailResponse.from_detail(detail)


@router.patch("/days/{day}", response_model=DayDetailResponse)
async def update_day(
    day: date,
    payload: UpdateDayRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> DayDetailResponse:
    """Apply a partial update to a day."""
    fields = payload.model_dump(exclude_unset=True)
    detail = _day_service(request).update_entry(user_id, day, fields)
    return DayDetailResponse.from_detail(detail)


@router.delete("/days/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_day(
    day: date, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Delete a day and its meals."""
    _day_service(request).delete_entry(user_id, day)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/days/{day}/summary", response_model=DaySummaryResponse)
async def day_summary(
    day: date,
    request: Request,
    height_cm: float | None = Query(default=None, alias="heightCm", gt=0),
    user_id: str = Depends(require_user),
) -> DaySummaryResponse:
    """Return totals, meals grouped by type and a health assessment."""
    summary = _day_service(request).get_summary(user_id, day, height_cm)
    if summary is None:
        raise NotFoundError("Daily entry not found")
    return DaySummaryResponse.from_domain(summary)


@router.post(
    "/days/{day}/meals",
    response_model=MealResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_meal(
    day: date,
    payload: CreateMealRequest,
    request: Request,
    user_id: str = Depends(require_user),
) -> MealResponse:
    """Log a meal, creating the day if it does not exist yet."""
    _, meal = _day_service(request).add_meal(user_id, day, payload.model_dump())
    return MealResponse.from_domain(meal)


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: UUID, request: Request, user_id: str = Depends(require_user)
) -> Response:
    """Delete one of the caller's meals."""
    _day_service(request).delete_meal(user_id, meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/trends", response_model=list[TrendPointResponse])
async def get_trends(
    request: Request, user_id: str = Depends(require_user)
) -> list[TrendPointResponse]:
    """Return the caller's trend series in ascending date order."""
    points = _day_service(request).get_trends(user_id)
    return [TrendPointResponse.from_domain(point) for point in points]
