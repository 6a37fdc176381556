"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from health_tracker.api.app import create_app
from health_tracker.config import Settings
from health_tracker.containers import AppContainer
from health_tracker.domain.days import DailyEntry, Meal
from health_tracker.errors import ConflictError
from health_tracker.services.cache import InMemoryCache
from health_tracker.services.days import DayRepository, DayService
from health_tracker.services.nutrition import (
    NutritionEstimateClient,
    NutritionEstimateService,
)


@dataclass
class InMemoryDayRepository(DayRepository):
    """In-memory day repository with a (user_id, date) uniqueness check."""

    entries: dict[UUID, DailyEntry] = field(default_factory=dict)
    meals: dict[UUID, Meal] = field(default_factory=dict)

    def list_entries(self, user_id: str) -> list[DailyEntry]:
        owned = [entry for entry in self.entries.values() if entry.user_id == user_id]
        return sorted(owned, key=lambda entry: entry.date, reverse=True)

    def get_entry(self, user_id: str, day: date) -> DailyEntry | None:
        for entry in self.entries.values():
            if entry.user_id == user_id and entry.date == day:
                return entry
        return None

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        return self.entries.get(entry_id)

    def insert_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry:
        for entry in self.entries.values():
            if entry.user_id == user_id and entry.date == day:
                raise ConflictError("Entry already exists")
        entry = DailyEntry(
            id=uuid4(), user_id=user_id, date=day, created_at=date.today(), **fields
        )
        self.entries[entry.id] = entry
        return entry

    def update_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry | None:
        entry = self.get_entry(user_id, day)
        if entry is None:
            return None
        updated = replace(entry, **fields)
        self.entries[entry.id] = updated
        return updated

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def list_meals(self, entry_ids: list[UUID]) -> list[Meal]:
        wanted = set(entry_ids)
        return [meal for meal in self.meals.values() if meal.daily_entry_id in wanted]

    def insert_meal(self, entry_id: UUID, fields: dict[str, object]) -> Meal:
        meal = Meal(id=uuid4(), daily_entry_id=entry_id, **fields)
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def delete_meals_for_entry(self, entry_id: UUID) -> None:
        owned = [
            meal.id for meal in self.meals.values() if meal.daily_entry_id == entry_id
        ]
        for meal_id in owned:
            del self.meals[meal_id]


@dataclass
class RacingDayRepository(InMemoryDayRepository):
    """Repository whose existence check misses a row another writer just added."""

    stale_reads: int = 0

    def get_entry(self, user_id: str, day: date) -> DailyEntry | None:
        if self.stale_reads > 0:
            self.stale_reads -= 1
            return None
        return super().get_entry(user_id, day)


@dataclass
class FakeNutritionClient(NutritionEstimateClient):
    """Fake estimator returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "calories": 350,
            "protein": 12,
            "carbs": 60,
            "fat": 6,
            "fiber": 8,
        }
    )
    failures: int = 0
    prompts: list[str] = field(default_factory=list)

    async def estimate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("estimator unavailable")
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def day_repository() -> InMemoryDayRepository:
    return InMemoryDayRepository()


@pytest.fixture
def day_service(day_repository: InMemoryDayRepository) -> DayService:
    return DayService(day_repository)


@pytest.fixture
def nutrition_client() -> FakeNutritionClient:
    return FakeNutritionClient()


@pytest.fixture
def container(
    settings: Settings,
    day_service: DayService,
    nutrition_client: FakeNutritionClient,
) -> AppContainer:
    nutrition_service = NutritionEstimateService(
        client=nutrition_client,
        cache=InMemoryCache(),
        model=settings.openai_model,
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        day_service=day_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
