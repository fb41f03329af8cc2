"""Prompt definitions for roadmap generation."""
from __future__ import annotations

from architect.llm.prompts.roadmap import (
    ROADMAP_GENERATION_PROMPT,
    ROADMAP_SYSTEM_PROMPT,
    build_generation_prompt,
    build_system_prompt,
)

__all__ = [
    "ROADMAP_GENERATION_PROMPT",
    "ROADMAP_SYSTEM_PROMPT",
    "build_generation_prompt",
    "build_system_prompt",
]
