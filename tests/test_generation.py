"""Tests for RoadmapGenerator with a fake provider."""

import asyncio
import json
from collections.abc import Iterator

import pytest

from architect.config.settings import Settings
from architect.generation import (
    GENERIC_FAILURE_MESSAGE,
    RoadmapGenerationError,
    RoadmapGenerator,
)
from architect.llm.providers import LLMProvider, StreamChunk, StreamComplete
from architect.llm.validation import RoadmapValidationError
from architect.models import RoadmapStore


class FakeProvider(LLMProvider):
    provider_name = "fake"

    def __init__(self, text: str = "", error: Exception | None = None) -> None:
        super().__init__(model="fake-model")
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        self.calls.append(
            {"messages": messages, "system": system, "max_tokens": max_tokens}
        )
        if self.error is not None:
            raise self.error
        half = len(self.text) // 2
        for piece in (self.text[:half], self.text[half:]):
            if piece:
                yield StreamChunk(text=piece)
        yield StreamComplete(full_text=self.text)


@pytest.fixture
def config() -> Settings:
    from architect.config.settings import settings

    settings._data = {"plan_language": "German", "llm": {"max_tokens": 2048}}
    return settings


def test_generate_returns_store(sample_payload, config) -> None:
    provider = FakeProvider(text=json.dumps(sample_payload))
    generator = RoadmapGenerator(provider=provider, config=config)

    store = asyncio.run(generator.generate("Open a web shop"))

    assert isinstance(store, RoadmapStore)
    assert store.get_statistics().total == 4
    call = provider.calls[0]
    assert call["max_tokens"] == 2048
    assert "German" in call["system"]
    assert "Open a web shop" in call["messages"][0]["content"]


def test_generate_streams_chunks(sample_payload, config) -> None:
    text = json.dumps(sample_payload)
    received: list[str] = []
    generator = RoadmapGenerator(provider=FakeProvider(text=text), config=config)

    generator.generate_sync("goal", on_chunk=received.append)

    assert "".join(received) == text


@pytest.mark.parametrize("goal", ["", "   \n"])
def test_empty_goal_rejected_before_calling_model(goal, config) -> None:
    provider = FakeProvider(text="{}")
    generator = RoadmapGenerator(provider=provider, config=config)

    with pytest.raises(ValueError):
        asyncio.run(generator.generate(goal))
    assert provider.calls == []


@pytest.mark.parametrize(
    "provider",
    [
        FakeProvider(error=RuntimeError("503 Service Unavailable")),
        FakeProvider(text=""),
        FakeProvider(text="I cannot help with that."),
        FakeProvider(text='{"project_summary": "x", "stages": [{"tasks": 1}]}'),
    ],
    ids=["provider-error", "empty", "not-json", "bad-shape"],
)
def test_failures_collapse_to_generic_error(provider, config) -> None:
    generator = RoadmapGenerator(provider=provider, config=config)

    with pytest.raises(RoadmapGenerationError) as exc:
        asyncio.run(generator.generate("Plan a trip"))

    assert str(exc.value) == GENERIC_FAILURE_MESSAGE
    assert exc.value.__cause__ is not None
    assert len(provider.calls) == 1


def test_validation_cause_is_chained(config) -> None:
    generator = RoadmapGenerator(provider=FakeProvider(text="{}"), config=config)

    with pytest.raises(RoadmapGenerationError) as exc:
        asyncio.run(generator.generate("Plan a trip"))

    assert isinstance(exc.value.__cause__, RoadmapValidationError)


def test_provider_created_from_settings(monkeypatch, config) -> None:
    created = FakeProvider(text="")
    monkeypatch.setattr(
        "architect.generation.create_provider", lambda cfg: created
    )
    generator = RoadmapGenerator(config=config)
    assert generator.provider is created
