"""LLM access for Architect: providers, prompts and response validation."""
from __future__ import annotations

from .providers import (
    APIErrorType,
    LLMProvider,
    StreamChunk,
    StreamComplete,
    classify_api_error,
    create_provider,
)
from .validation import (
    RoadmapValidationError,
    RoadmapValidationResult,
    extract_json_object,
    normalize_payload,
    parse_roadmap_response,
    validate_roadmap_payload,
)

__all__ = [
    "APIErrorType",
    "LLMProvider",
    "RoadmapValidationError",
    "RoadmapValidationResult",
    "StreamChunk",
    "StreamComplete",
    "classify_api_error",
    "create_provider",
    "extract_json_object",
    "normalize_payload",
    "parse_roadmap_response",
    "validate_roadmap_payload",
]
