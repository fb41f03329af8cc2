"""Base class for LLM providers."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


@dataclass
class StreamChunk:
    """A chunk of streamed text from the LLM."""

    text: str


@dataclass
class StreamComplete:
    """Stream completion with metadata."""

    full_text: str
    cost_usd: float | None = None
    tokens_in: int | None = None
    tokens_out: int | None = None


class APIErrorType(Enum):
    """Types of API errors for classification."""

    RATE_LIMITED = "rate_limited"
    API_UNAVAILABLE = "api_unavailable"
    BUDGET_EXCEEDED = "budget_exceeded"
    UNKNOWN = "unknown"


# Patterns to match in error messages (case-insensitive)
RATE_LIMIT_PATTERNS = [
    "rate limit",
    "rate_limit",
    "ratelimit",
    "429",
    "too many requests",
    "throttl",
]

UNAVAILABLE_PATTERNS = [
    "overloaded",
    "503",
    "502",
    "504",
    "unavailable",
    "service error",
    "temporarily",
    "try again later",
    "capacity",
]

BUDGET_PATTERNS = [
    "budget",
    "spending limit",
    "billing",
    "credit",
    "quota exceeded",
    "usage limit",
    "out of usage",
    "limit reached",
]


def classify_api_error(error: BaseException) -> APIErrorType:
    """Classify an API error by parsing the error message.

    Only used for diagnostics; callers see a single generation failure.
    """
    error_str = str(error).lower()

    for pattern in BUDGET_PATTERNS:
        if pattern in error_str:
            return APIErrorType.BUDGET_EXCEEDED

    for pattern in RATE_LIMIT_PATTERNS:
        if pattern in error_str:
            return APIErrorType.RATE_LIMITED

    for pattern in UNAVAILABLE_PATTERNS:
        if pattern in error_str:
            return APIErrorType.API_UNAVAILABLE

    return APIErrorType.UNKNOWN


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    provider_name: str  # "anthropic" or "openai"

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        temperature: float | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            model: Model identifier string.
            api_key: Optional API key (uses env var or web auth if None).
            temperature: Sampling temperature, where the provider supports it.
        """
        self.model = model
        self.api_key = api_key
        self.temperature = temperature

    @abstractmethod
    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Stream a chat completion.

        Args:
            messages: Conversation history as list of {role, content} dicts.
            system: System prompt.
            max_tokens: Maximum tokens in response.

        Yields:
            StreamChunk for each text piece, then StreamComplete at end.
        """
