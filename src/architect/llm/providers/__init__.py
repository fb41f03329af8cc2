"""LLM provider implementations."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from architect.llm.providers.base import (
    APIErrorType,
    LLMProvider,
    StreamChunk,
    StreamComplete,
    classify_api_error,
)

if TYPE_CHECKING:
    from architect.config.settings import Settings

logger = logging.getLogger(__name__)


def create_provider(config: "Settings | None" = None) -> LLMProvider:
    """Build the provider selected in settings.

    Provider modules are imported lazily so that only the SDK in use needs
    to be importable.
    """
    if config is None:
        from architect.config.settings import settings as config

    if config.llm_provider == "openai":
        from architect.llm.providers.openai import OpenAIProvider

        return OpenAIProvider(
            model=config.llm_model,
            api_key=config.openai_api_key,
            temperature=config.temperature,
        )

    from architect.llm.providers.anthropic import AnthropicProvider

    return AnthropicProvider(
        model=config.llm_model,
        api_key=config.anthropic_api_key,
        use_web_auth=config.use_web_auth,
        temperature=config.temperature,
    )


__all__ = [
    "APIErrorType",
    "LLMProvider",
    "StreamChunk",
    "StreamComplete",
    "classify_api_error",
    "create_provider",
]
