"""Tests for HTTP-based adapters."""

import asyncio
import json

from nutrition_analysis.adapters.openai_nutrition_client import OpenAINutritionClient


def _completion(content: str | None) -> object:
    message = type("Message", (), {"content": content})()
    choice = type("Choice", (), {"message": message})()
    return type("Completion", (), {"choices": [choice]})()


class _FakeCompletions:
    def __init__(self, response: object) -> None:
        self.response = response
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return self.response


class _FakeOpenAI:
    def __init__(self, response: object) -> None:
        self.chat = type("Chat", (), {"completions": _FakeCompletions(response)})()
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def test_openai_nutrition_client_returns_content() -> None:
    content = json.dumps({"calories": 105, "fat": 0.4, "carbs": 27, "protein": 1.3})
    fake = _FakeOpenAI(_completion(content))
    client = OpenAINutritionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-4o-mini",
            system_prompt="Be precise.",
            prompt="banana",
            temperature=0.1,
            max_tokens=150,
        )
    )

    assert result == content
    payload = fake.chat.completions.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4o-mini"
    assert payload["messages"] == [
        {"role": "system", "content": "Be precise."},
        {"role": "user", "content": "banana"},
    ]
    assert payload["temperature"] == 0.1
    assert payload["max_tokens"] == 150
    assert payload["response_format"] == {"type": "json_object"}


def test_openai_nutrition_client_handles_no_choices() -> None:
    fake = _FakeOpenAI(type("Completion", (), {"choices": []})())
    client = OpenAINutritionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-4o-mini",
            system_prompt="",
            prompt="banana",
            temperature=0.1,
            max_tokens=150,
        )
    )

    assert result is None


def test_openai_nutrition_client_close() -> None:
    fake = _FakeOpenAI(_completion(None))
    client = OpenAINutritionClient(client=fake)

    asyncio.run(client.close())

    assert fake.closed
