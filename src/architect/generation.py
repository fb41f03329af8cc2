"""Roadmap generation from a free-text goal.

The generator is the only place that talks to a model. Whatever goes wrong
on the way (provider errors, empty output, malformed JSON, a payload that is
not roadmap-shaped) surfaces to callers as one ``RoadmapGenerationError``
with a generic message; the detail is kept on ``__cause__`` and in the log.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from architect.llm.prompts import build_generation_prompt, build_system_prompt
from architect.llm.providers import (
    LLMProvider,
    StreamChunk,
    StreamComplete,
    classify_api_error,
    create_provider,
)
from architect.llm.validation import parse_roadmap_response
from architect.models.store import RoadmapStore

if TYPE_CHECKING:
    from architect.config.settings import Settings

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "The plan could not be created. Please try again."

ChunkCallback = Callable[[str], None]


class RoadmapGenerationError(RuntimeError):
    """Generation failed; the message is safe to show to users."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        super().__init__(message)


class RoadmapGenerator:
    """Turns a goal into a validated RoadmapStore."""

    def __init__(
        self,
        provider: LLMProvider | None = None,
        config: "Settings | None" = None,
    ) -> None:
        if config is None:
            from architect.config.settings import settings as config
        self._config = config
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        """Provider in use, created from settings on first access."""
        if self._provider is None:
            self._provider = create_provider(self._config)
        return self._provider

    async def generate(
        self,
        goal: str,
        on_chunk: ChunkCallback | None = None,
    ) -> RoadmapStore:
        """Generate a roadmap for ``goal``.

        Args:
            goal: Free-text description of what the user wants to achieve.
            on_chunk: Called with each streamed piece of text, from the
                worker thread.

        Returns:
            A store wrapping the validated roadmap.

        Raises:
            ValueError: If the goal is empty or whitespace.
            RoadmapGenerationError: On any provider or validation failure.
        """
        if not goal or not goal.strip():
            raise ValueError("Goal must not be empty")

        logger.info("Generating roadmap for goal: %s", goal.strip()[:100])
        try:
            text = await asyncio.to_thread(self._stream_response, goal, on_chunk)
            roadmap = parse_roadmap_response(text)
        except Exception as e:
            logger.exception(
                "Roadmap generation failed (%s)", classify_api_error(e).value
            )
            raise RoadmapGenerationError() from e

        store = RoadmapStore(roadmap)
        stats = store.get_statistics()
        logger.info(
            "Generated roadmap: %d stages, %d tasks",
            len(store.stages),
            stats.total,
        )
        return store

    def generate_sync(
        self,
        goal: str,
        on_chunk: ChunkCallback | None = None,
    ) -> RoadmapStore:
        """Blocking wrapper around :meth:`generate` for non-async callers."""
        return asyncio.run(self.generate(goal, on_chunk))

    def _stream_response(self, goal: str, on_chunk: ChunkCallback | None) -> str:
        full_text = ""
        for result in self.provider.stream_message(
            messages=[{"role": "user", "content": build_generation_prompt(goal)}],
            system=build_system_prompt(self._config.plan_language),
            max_tokens=self._config.max_tokens,
        ):
            if isinstance(result, StreamChunk):
                full_text += result.text
                if on_chunk:
                    on_chunk(result.text)
            elif isinstance(result, StreamComplete):
                logger.debug(
                    "Stream complete: %d chars, tokens in=%s out=%s",
                    len(result.full_text),
                    result.tokens_in,
                    result.tokens_out,
                )
        return full_text
