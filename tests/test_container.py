"""Tests for container wiring."""

import asyncio

from health_tracker.containers import build_container


def test_build_container_creates_services(settings) -> None:
    settings.enforce_meal_ownership = False
    settings.nutrition_cache_ttl_seconds = 60
    settings.nutrition_cache_max_entries = 8
    settings.supabase_page_size = 500
    container = build_container(settings)

    assert container.day_service is not None
    assert container.day_service.enforce_meal_ownership is False
    assert container.nutrition_service.model == settings.openai_model
    assert container.nutrition_service.ttl_seconds == 60
    assert container.nutrition_service.cache.max_entries == 8
    assert container.day_service.repository.page_size == 500
    asyncio.run(container.close_resources())
