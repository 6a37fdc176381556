"""Supabase repository for daily entries and meals."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from postgrest import SyncSelectRequestBuilder
from postgrest.exceptions import APIError
from supabase import Client

from health_tracker.domain.days import DailyEntry, Meal, MealType
from health_tracker.errors import ConflictError
from health_tracker.services.days import DayRepository

_UNIQUE_VIOLATION = "23505"

_ENTRY_COLUMNS = (
    "id, user_id, date, weight, steps, walking_minutes, strength_training, "
    "strength_notes, created_at"
)
_MEAL_COLUMNS = (
    "id, daily_entry_id, meal_type, description, quantity, calories, protein, "
    "carbs, fat, fiber"
)


@dataclass
class SupabaseDayRepository(DayRepository):
    """Supabase implementation backed by daily_entries and meals tables."""

    client: Client
    page_size: int = 1000
    id_chunk_size: int = 100

    def list_entries(self, user_id: str) -> list[DailyEntry]:
        """Return a user's entries, newest date first."""
        rows = self._select_all(
            lambda: self.client.table("daily_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", user_id)
            .order("date", desc=True)
        )
        return [_parse_entry(row) for row in rows]

    def get_entry(self, user_id: str, day: date) -> DailyEntry | None:
        """Return the entry for a user and date."""
        response = (
            self.client.table("daily_entries")
            .select(_ENTRY_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("daily_entries")
            .select(_ENTRY_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def insert_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry:
        """Insert an entry unless (user_id, date) already exists.

        The upsert ignores duplicates, so a row that already exists comes back
        as an empty result and is reported as a conflict.
        """
        payload = {"user_id": user_id, "date": day.isoformat(), **fields}
        try:
            response = (
                self.client.table("daily_entries")
                .upsert(payload, on_conflict="user_id,date", ignore_duplicates=True)
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise ConflictError("Entry already exists") from exc
            raise
        if not response.data:
            raise ConflictError("Entry already exists")
        return _parse_entry(response.data[0])

    def update_entry(
        self, user_id: str, day: date, fields: dict[str, object]
    ) -> DailyEntry | None:
        """Patch an entry row and return the updated row."""
        response = (
            self.client.table("daily_entries")
            .update(fields)
            .eq("user_id", user_id)
            .eq("date", day.isoformat())
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""
        self.client.table("daily_entries").delete().eq("id", str(entry_id)).execute()

    def list_meals(self, entry_ids: list[UUID]) -> list[Meal]:
        """Return meals for the given entries, in logging order per entry.

        Ids are queried in chunks to keep the filter URL short; an entry's
        meals always come back from a single chunk.
        """
        ids = [str(entry_id) for entry_id in entry_ids]
        meals: list[Meal] = []
        for start in range(0, len(ids), self.id_chunk_size):
            chunk = ids[start : start + self.id_chunk_size]
            rows = self._select_all(
                lambda chunk=chunk: self.client.table("meals")
                .select(_MEAL_COLUMNS)
                .in_("daily_entry_id", chunk)
                .order("created_at", desc=False)
            )
            meals.extend(_parse_meal(row) for row in rows)
        return meals

    def insert_meal(self, entry_id: UUID, fields: dict[str, object]) -> Meal:
        """Insert a meal row and return it."""
        payload = {"daily_entry_id": str(entry_id), **fields}
        response = self.client.table("meals").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def delete_meals_for_entry(self, entry_id: UUID) -> None:
        """Delete the meals of an entry."""
        self.client.table("meals").delete().eq(
            "daily_entry_id", str(entry_id)
        ).execute()

    def _select_all(
        self, build_query: Callable[[], SyncSelectRequestBuilder]
    ) -> list[dict[str, object]]:
        # PostgREST caps each response at max_rows without an error; page_size
        # must not exceed it. A short page ends the read.
        rows: list[dict[str, object]] = []
        start = 0
        while True:
            response = (
                build_query().range(start, start + self.page_size - 1).execute()
            )
            page = response.data or []
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size


def _parse_entry(row: dict[str, object]) -> DailyEntry:
    weight = row.get("weight")
    created_at = row.get("created_at")
    return DailyEntry(
        id=UUID(str(row["id"])),
        user_id=str(row["user_id"]),
        date=date.fromisoformat(str(row["date"])),
        weight=float(weight) if weight is not None else None,
        steps=int(row.get("steps") or 0),
        walking_minutes=int(row.get("walking_minutes") or 0),
        strength_training=bool(row.get("strength_training") or False),
        strength_notes=row.get("strength_notes"),
        created_at=date.fromisoformat(str(created_at)[:10]) if created_at else None,
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        daily_entry_id=UUID(str(row["daily_entry_id"])),
        meal_type=MealType(row["meal_type"]),
        description=str(row.get("description", "")),
        quantity=row.get("quantity"),
        calories=int(row.get("calories") or 0),
        protein=int(row.get("protein") or 0),
        carbs=int(row.get("carbs") or 0),
        fat=int(row.get("fat") or 0),
        fiber=int(row.get("fiber") or 0),
    )
