"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_tracker.adapters.openai_nutrition_client import OpenAINutritionClient
from health_tracker.adapters.supabase_day_repository import SupabaseDayRepository
from health_tracker.config import Settings
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.days import DayService
from health_tracker.services.nutrition import NutritionEstimateService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    day_service: DayService
    nutrition_service: NutritionEstimateService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    day_service = DayService(
        repository=SupabaseDayRepository(
            supabase_client, page_size=resolved_settings.supabase_page_size
        ),
        enforce_meal_ownership=resolved_settings.enforce_meal_ownership,
    )
    openai_client = OpenAINutritionClient.create(resolved_settings.openai_api_key)
    nutrition_service = NutritionEstimateService(
        client=openai_client,
        cache=InMemoryCache(
            max_entries=resolved_settings.nutrition_cache_max_entries
        ),
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        ttl_seconds=resolved_settings.nutrition_cache_ttl_seconds,
        retry_attempts=resolved_settings.nutrition_retry_attempts,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        day_service=day_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
