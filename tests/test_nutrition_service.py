"""Tests for the nutrition estimate service and its cache."""

import asyncio

import pytest

from health_tracker.domain.nutrition import NutritionEstimate
from health_tracker.errors import ValidationError
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.nutrition import (
    NutritionEstimateService,
    normalize_estimate,
)
from tests.conftest import FakeNutritionClient


def _service(client: FakeNutritionClient) -> NutritionEstimateService:
    return NutritionEstimateService(
        client=client,
        cache=InMemoryCache(),
        model="gpt-test",
        retry_delay_seconds=0,
    )


def test_estimate_returns_normalized_values() -> None:
    client = FakeNutritionClient()
    service = _service(client)

    result = asyncio.run(service.estimate("Oatmeal with berries", "1 bowl"))

    assert result == NutritionEstimate(
        calories=350, protein=12, carbs=60, fat=6, fiber=8
    )
    assert "1 bowl" in client.prompts[0]


def test_estimate_uses_cache() -> None:
    client = FakeNutritionClient()
    service = _service(client)

    asyncio.run(service.estimate("Chicken Salad"))
    asyncio.run(service.estimate("chicken salad "))

    assert len(client.prompts) == 1


def test_estimate_retries_once() -> None:
    client = FakeNutritionClient(failures=1)
    service = _service(client)

    result = asyncio.run(service.estimate("Rice"))

    assert result.calories == 350
    assert len(client.prompts) == 2


def test_estimate_raises_after_retries() -> None:
    client = FakeNutritionClient(failures=2)
    service = _service(client)

    with pytest.raises(RuntimeError):
        asyncio.run(service.estimate("Rice"))


def test_estimate_requires_description() -> None:
    service = _service(FakeNutritionClient())

    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(service.estimate("   "))

    assert exc_info.value.field == "description"


def test_normalize_estimate_zeroes_unusable_values() -> None:
    result = normalize_estimate(
        {"calories": "210.6", "protein": -3, "carbs": "lots", "fat": None}
    )

    assert result == NutritionEstimate(calories=211, protein=0, carbs=0, fat=0, fiber=0)


def test_in_memory_cache_evicts_oldest() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("a", 1, ttl_seconds=60)
    cache.set("b", 2, ttl_seconds=60)
    cache.set("c", 3, ttl_seconds=60)

    assert cache.get("a") is None
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_in_memory_cache_expires_entries() -> None:
    cache = InMemoryCache()
    cache.set("a", 1, ttl_seconds=0)

    assert cache.get("a") is None
