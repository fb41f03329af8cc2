"""OpenAI LLM provider."""

import logging
import os
from collections.abc import Iterator
from typing import Any

from architect.llm.providers.base import LLMProvider, StreamChunk, StreamComplete

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"


def _extract_usage_tokens(usage: Any) -> tuple[int | None, int | None]:
    """Extract prompt/completion tokens from usage payloads."""
    if usage is None:
        return None, None
    tokens_in = getattr(usage, "prompt_tokens", None)
    tokens_out = getattr(usage, "completion_tokens", None)
    if tokens_in is None and isinstance(usage, dict):
        tokens_in = usage.get("prompt_tokens")
    if tokens_out is None and isinstance(usage, dict):
        tokens_out = usage.get("completion_tokens")
    return (
        int(tokens_in) if tokens_in is not None else None,
        int(tokens_out) if tokens_out is not None else None,
    )


class OpenAIProvider(LLMProvider):
    """OpenAI provider using the openai Python SDK.

    Requires an API key (from settings, env var, or passed directly).
    Responses are requested in JSON mode.
    """

    provider_name = "openai"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        temperature: float | None = None,
    ) -> None:
        """Initialize OpenAI provider.

        Args:
            model: Model identifier (e.g., "gpt-4o").
            api_key: Optional API key. If None, uses OPENAI_API_KEY env var.
            temperature: Sampling temperature passed to the API when set.
        """
        super().__init__(model=model, api_key=api_key, temperature=temperature)
        logger.info("OpenAIProvider initialized (model=%s)", model)

    def _get_client(self) -> Any:
        """Get an OpenAI client instance."""
        from openai import OpenAI

        api_key = self.api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError(
                "OpenAI API key required. Set OPENAI_API_KEY env var or configure "
                "in settings."
            )
        return OpenAI(api_key=api_key)

    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Stream response chunks from OpenAI."""
        logger.info(
            "stream_message: %d messages, system=%d chars",
            len(messages),
            len(system),
        )
        tokens_in: int | None = None
        tokens_out: int | None = None

        try:
            client = self._get_client()

            api_messages: list[dict[str, str]] = []
            if system:
                api_messages.append({"role": "system", "content": system})
            api_messages.extend(messages)

            request: dict[str, Any] = {
                "model": self.model,
                "messages": api_messages,
                "max_tokens": max_tokens,
                "stream": True,
                "stream_options": {"include_usage": True},
                "response_format": {"type": "json_object"},
            }
            if self.temperature is not None:
                request["temperature"] = self.temperature

            full_text = ""
            stream = client.chat.completions.create(**request)
            for chunk in stream:
                if chunk.choices and chunk.choices[0].delta.content:
                    text = chunk.choices[0].delta.content
                    full_text += text
                    yield StreamChunk(text=text)
                if getattr(chunk, "usage", None):
                    tokens_in, tokens_out = _extract_usage_tokens(chunk.usage)

            yield StreamComplete(
                full_text=full_text,
                cost_usd=None,
                tokens_in=tokens_in,
                tokens_out=tokens_out,
            )
        except Exception as e:
            logger.exception("Error in stream_message: %s", e)
            raise
