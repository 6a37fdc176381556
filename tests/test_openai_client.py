"""Tests for the OpenAI nutrition client."""

import asyncio
import json

import pytest

from health_tracker.adapters.openai_nutrition_client import OpenAINutritionClient
from health_tracker.services.nutrition import ESTIMATE_SCHEMA


class _FakeResponses:
    def __init__(self, output_text: str) -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str) -> None:
        self.responses = _FakeResponses(output_text)


def test_openai_nutrition_client_parses_output() -> None:
    fake = _FakeOpenAI(json.dumps({"calories": 120, "protein": 4}))
    client = OpenAINutritionClient(client=fake)

    result = asyncio.run(
        client.estimate(
            model="gpt-5.2",
            reasoning_effort="low",
            store=False,
            prompt="Estimate an apple",
            schema=ESTIMATE_SCHEMA,
        )
    )

    assert result == {"calories": 120, "protein": 4}
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["text"]["format"]["name"] == "nutrition_estimate"


def test_openai_nutrition_client_omits_reasoning_when_unset() -> None:
    fake = _FakeOpenAI("{}")
    client = OpenAINutritionClient(client=fake)

    asyncio.run(
        client.estimate(
            model="gpt-5.2",
            reasoning_effort=None,
            store=False,
            prompt="Estimate",
            schema=ESTIMATE_SCHEMA,
        )
    )

    assert "reasoning" not in fake.responses.last_payload


def test_openai_nutrition_client_rejects_empty_output() -> None:
    client = OpenAINutritionClient(client=_FakeOpenAI(""))

    with pytest.raises(RuntimeError):
        asyncio.run(
            client.estimate(
                model="gpt-5.2",
                reasoning_effort=None,
                store=False,
                prompt="Estimate",
                schema=ESTIMATE_SCHEMA,
            )
        )
