"""Prompts for turning a free-text goal into a staged roadmap."""
from __future__ import annotations

ROADMAP_SYSTEM_PROMPT = """\
You are a senior technical project manager. Your job is to turn a user's
rough idea into a detailed, professional plan of action.

Principles:
1. Decomposition: break every task into 3-6 concrete subtasks. Subtasks are
   atomic actions ("Download the installer", "Run the script", "Check the logs").
2. Structure: group tasks into logical stages. Priorities reflect the
   critical path.
3. Reasoning: briefly explain why each task matters at this point.

Write all text in {language}. Output valid JSON only and follow the schema
exactly."""

ROADMAP_GENERATION_PROMPT = """\
Create a roadmap for the goal below.

Output a single JSON object with this shape:
{{
  "project_summary": "short professional summary of the plan",
  "stages": [
    {{
      "stage_name": "stage label",
      "tasks": [
        {{
          "id": 1,
          "title": "task title",
          "description": "what the task involves",
          "reasoning": "why it matters now",
          "priority": "High" | "Medium" | "Low",
          "status": "Todo",
          "tags": ["tag"],
          "subtasks": [
            {{"id": "1-sub-0", "title": "atomic action", "status": "Todo"}}
          ]
        }}
      ]
    }}
  ]
}}

Rules:
- Task "id" values are integers, unique across the whole roadmap.
- "priority" is exactly one of "High", "Medium", "Low".
- "status" is "Todo" for every task and subtask.
- Output ONLY the JSON object, no markdown code blocks or other text.

Goal:
{goal}

Generate the roadmap JSON now:"""


def build_system_prompt(language: str = "English") -> str:
    """System prompt for roadmap generation in the given language."""
    return ROADMAP_SYSTEM_PROMPT.format(language=language)


def build_generation_prompt(goal: str) -> str:
    """User prompt asking for a roadmap for ``goal``."""
    return ROADMAP_GENERATION_PROMPT.format(goal=goal.strip())
