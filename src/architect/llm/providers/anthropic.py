"""Anthropic LLM provider using Claude Agent SDK."""

import asyncio
import logging
import os
from collections.abc import Iterator

from claude_agent_sdk import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
    query,
)

from architect.llm.providers.base import LLMProvider, StreamChunk, StreamComplete

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5"


def _extract_token_usage(message: object) -> tuple[int | None, int | None]:
    """Best-effort extraction of token usage from SDK result messages."""
    usage = getattr(message, "usage", None)
    if usage is None:
        return None, None

    if isinstance(usage, dict):
        tokens_in = usage.get("input_tokens")
        tokens_out = usage.get("output_tokens")
    else:
        tokens_in = getattr(usage, "input_tokens", None)
        tokens_out = getattr(usage, "output_tokens", None)

    return (
        int(tokens_in) if tokens_in is not None else None,
        int(tokens_out) if tokens_out is not None else None,
    )


class AnthropicProvider(LLMProvider):
    """Anthropic provider using Claude Agent SDK.

    Supports both web auth (default) and API key authentication.
    """

    provider_name = "anthropic"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        use_web_auth: bool = True,
        temperature: float | None = None,
    ) -> None:
        """Initialize Anthropic provider.

        Args:
            model: Model identifier.
            api_key: Optional API key. If None and use_web_auth=True, uses web auth.
            use_web_auth: Whether to use web auth (default True).
            temperature: Ignored by the Agent SDK; kept for a uniform interface.
        """
        super().__init__(model=model, api_key=api_key, temperature=temperature)
        self.use_web_auth = use_web_auth
        logger.info(
            "AnthropicProvider initialized (model=%s, web_auth=%s)",
            model,
            use_web_auth,
        )

    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Stream response chunks from Claude via Agent SDK."""
        prompt = self._format_messages_as_prompt(messages)
        logger.info(
            "stream_message: prompt=%d chars, system=%d chars",
            len(prompt),
            len(system),
        )
        try:
            yield from self._run_agent_query(prompt, system)
        except Exception as e:
            logger.exception("Error in stream_message: %s", e)
            raise

    def _format_messages_as_prompt(self, messages: list[dict[str, str]]) -> str:
        """Format message history as a prompt for the agent."""
        if not messages:
            return ""

        parts: list[str] = []
        for msg in messages:
            role = msg.get("role", "user")
            content = msg.get("content", "")
            if role == "user":
                parts.append(f"User: {content}")
            elif role == "assistant":
                parts.append(f"Assistant: {content}")

        return "\n\n".join(parts)

    def _run_agent_query(
        self, prompt: str, system: str
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Run agent query and yield text chunks, then StreamComplete."""
        env_backup: str | None = None

        if self.use_web_auth:
            # Clear API key to force web auth
            env_backup = os.environ.pop("ANTHROPIC_API_KEY", None)
        elif self.api_key:
            env_backup = os.environ.get("ANTHROPIC_API_KEY")
            os.environ["ANTHROPIC_API_KEY"] = self.api_key

        loop = asyncio.new_event_loop()
        try:

            async def collect_results() -> (
                tuple[list[str], float | None, int | None, int | None]
            ):
                chunks: list[str] = []
                cost: float | None = None
                tokens_in: int | None = None
                tokens_out: int | None = None
                options = ClaudeAgentOptions(
                    allowed_tools=[],
                    system_prompt=system if system else None,
                    model=self.model,
                )
                logger.info("Starting agent query")
                async for message in query(prompt=prompt, options=options):
                    if isinstance(message, AssistantMessage):
                        for block in message.content:
                            if isinstance(block, TextBlock):
                                chunks.append(block.text)
                                logger.debug("Got chunk: %d chars", len(block.text))
                    elif isinstance(message, ResultMessage):
                        cost = message.total_cost_usd
                        tokens_in, tokens_out = _extract_token_usage(message)
                        logger.info("Query complete, cost: $%.4f", cost or 0)
                return chunks, cost, tokens_in, tokens_out

            chunks, cost, tokens_in, tokens_out = loop.run_until_complete(
                collect_results()
            )
            logger.info("Got %d chunks total", len(chunks))

            full_text = ""
            for chunk in chunks:
                full_text += chunk
                yield StreamChunk(text=chunk)

            yield StreamComplete(
                full_text=full_text,
                cost_usd=cost,
                tokens_in=tokens_in,
                tokens_out=tokens_out,
            )
        finally:
            loop.close()
            if self.use_web_auth:
                if env_backup is not None:
                    os.environ["ANTHROPIC_API_KEY"] = env_backup
            elif self.api_key:
                if env_backup is None:
                    os.environ.pop("ANTHROPIC_API_KEY", None)
                else:
                    os.environ["ANTHROPIC_API_KEY"] = env_backup
