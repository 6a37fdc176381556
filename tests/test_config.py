"""Tests for configuration helpers."""

from health_tracker.config import Settings, parse_allowed_user_ids


def test_parse_allowed_user_ids_wildcards() -> None:
    assert parse_allowed_user_ids(None) is None
    assert parse_allowed_user_ids("") is None
    assert parse_allowed_user_ids(" * ") is None
    assert parse_allowed_user_ids(" , ") is None


def test_parse_allowed_user_ids_values() -> None:
    assert parse_allowed_user_ids("alice, bob,,") == {"alice", "bob"}


def test_settings_defaults(settings: Settings) -> None:
    assert settings.enforce_meal_ownership is True
    assert settings.openai_store is False
    assert settings.allowed_user_ids is None
    assert settings.nutrition_cache_ttl_seconds == 86400
    assert settings.nutrition_retry_attempts == 1
