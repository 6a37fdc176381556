"""Meal nutrition estimation with caching."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from health_tracker.domain.days import NUTRIENT_FIELDS
from health_tracker.domain.nutrition import NutritionEstimate
from health_tracker.errors import ValidationError
from health_tracker.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        key: {"type": "integer", "minimum": 0} for key in NUTRIENT_FIELDS
    },
    "required": list(NUTRIENT_FIELDS),
    "additionalProperties": False,
}


class NutritionEstimateClient(Protocol):
    """Interface for an external nutrition estimator."""

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return raw nutrient values for the prompt."""


@dataclass
class NutritionEstimateService:
    """Service that asks the estimator for macros and normalises the answer."""

    client: NutritionEstimateClient
    cache: Cache
    model: str
    reasoning_effort: str | None = None
    store: bool = False
    ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def estimate(
        self, description: str, quantity: str | None = None
    ) -> NutritionEstimate:
        """Estimate nutrients for a food description and optional quantity."""
        if not description or not description.strip():
            raise ValidationError("Description is required", field="description")
        description = description.strip()
        quantity = quantity.strip() if quantity and quantity.strip() else None
        cache_key = f"estimate:{description.lower()}:{(quantity or '').lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, NutritionEstimate):
            return cached

        prompt = _build_prompt(description, quantity)
        raw = await self._call_with_retry(
            lambda: self.client.estimate(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=ESTIMATE_SCHEMA,
            )
        )
        result = normalize_estimate(raw)
        self.cache.set(cache_key, result, ttl_seconds=self.ttl_seconds)
        return result

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]"
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition estimate failed (attempt %s/%s): %s",
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def normalize_estimate(raw: dict[str, object]) -> NutritionEstimate:
    """Coerce estimator output to non-negative integers, 0 when unusable."""
    return NutritionEstimate(
        **{key: _to_amount(raw.get(key)) for key in NUTRIENT_FIELDS}
    )


def _to_amount(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        amount = value
    elif isinstance(value, str):
        try:
            amount = float(value)
        except ValueError:
            return 0
    else:
        return 0
    if amount != amount or amount < 0:  # NaN or negative
        return 0
    return round(amount)


def _build_prompt(description: str, quantity: str | None) -> str:
    portion = f"Quantity: {quantity}." if quantity else "Assume one typical serving."
    return (
        "Estimate the nutrition of this food. "
        f"Food: {description}. {portion} "
        "Return calories in kcal and protein, carbs, fat and fiber in grams, "
        "each as a whole number."
    )
