"""Nutrition lookup endpoint backed by the estimation service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from health_tracker.api.identity import require_user
from health_tracker.api.models import NutritionEstimateResponse, NutritionLookupRequest
from health_tracker.errors import TrackerError

router = APIRouter(prefix="/api", tags=["nutrition"])

_logger = logging.getLogger(__name__)


@router.post(
    "/nutrition-lookup",
    response_model=NutritionEstimateResponse,
    dependencies=[Depends(require_user)],
)
async def nutrition_lookup(
    payload: NutritionLookupRequest, request: Request
) -> NutritionEstimateResponse | JSONResponse:
    """Estimate calories and macros for a described food."""
    service = request.app.state.container.nutrition_service
    try:
        estimate = await service.estimate(payload.description, payload.quantity)
    except TrackerError:
        raise
    except Exception:
        _logger.exception(
            "Nutrition estimate failed", extra={"description": payload.description}
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"message": "Nutrition estimate unavailable"},
        )
    return NutritionEstimateResponse.from_domain(estimate)
