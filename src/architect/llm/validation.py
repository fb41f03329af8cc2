"""Validation of model output at the generation boundary.

Model output is untrusted text. This module extracts the JSON object from
it, fills in the fields the model is allowed to omit, and checks the result
against the roadmap shape before anything reaches the store.

Normalization applied before shape validation:

- A task without ``subtasks`` (or with ``null``) gets an empty list.
- A subtask without an ``id`` (missing, ``null`` or ``""``) gets
  ``"<taskId>-sub-<index>"``.
- A subtask without a ``status`` gets ``"Todo"``.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from architect.models.roadmap import Roadmap
from architect.models.task import RoadmapShapeError, SubtaskStatus

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class RoadmapValidationError(Exception):
    """Model output could not be turned into a roadmap."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))


@dataclass
class RoadmapValidationResult:
    """Outcome of validating a model response."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    data: Roadmap | None = None


def _first_object(text: str) -> str | None:
    decoder = json.JSONDecoder()
    for match in re.finditer(r"\{", text):
        start = match.start()
        try:
            parsed, end = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return text[start:end]
    return None


def extract_json_object(text: str) -> str | None:
    """Pull the JSON object out of a model response.

    Accepts a bare object, an object inside a markdown code fence, or an
    object surrounded by prose. Fences without an object are skipped, and
    when no fenced body decodes the whole text is scanned. If nothing
    decodes, the outermost brace span is returned so the caller reports
    the JSON error. Returns None when no braces are found.
    """
    stripped = text.strip()
    if not stripped:
        return None
    for fenced in _FENCE_RE.finditer(stripped):
        body = fenced.group(1)
        if "{" in body:
            found = _first_object(body)
            if found is not None:
                return found
    found = _first_object(stripped)
    if found is not None:
        return found
    start = stripped.find("{")
    end = stripped.rfind("}")
    if start == -1 or end < start:
        return None
    return stripped[start : end + 1]


def normalize_payload(payload: Any) -> Any:
    """Fill in optional subtask fields the model may have left out.

    The payload is modified in place and returned. Anything that is not
    shaped enough to normalize is left for shape validation to report.
    """
    if not isinstance(payload, dict):
        return payload
    stages = payload.get("stages")
    if not isinstance(stages, list):
        return payload
    for stage in stages:
        if not isinstance(stage, dict) or not isinstance(stage.get("tasks"), list):
            continue
        for task in stage["tasks"]:
            if not isinstance(task, dict):
                continue
            if task.get("subtasks") is None:
                task["subtasks"] = []
            if not isinstance(task["subtasks"], list):
                continue
            for index, sub in enumerate(task["subtasks"]):
                if not isinstance(sub, dict):
                    continue
                if sub.get("id") in (None, ""):
                    sub["id"] = f"{task.get('id')}-sub-{index}"
                if not sub.get("status"):
                    sub["status"] = SubtaskStatus.TODO.value
    return payload


def validate_roadmap_payload(text: str) -> RoadmapValidationResult:
    """Validate a raw model response as a roadmap.

    Args:
        text: The full text returned by the model.

    Returns:
        A result holding either the parsed Roadmap or every error found.
    """
    raw = extract_json_object(text or "")
    if raw is None:
        if not (text or "").strip():
            return RoadmapValidationResult(valid=False, errors=["empty response"])
        return RoadmapValidationResult(
            valid=False, errors=["response does not contain a JSON object"]
        )

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        return RoadmapValidationResult(valid=False, errors=[f"invalid JSON: {e}"])

    try:
        roadmap = Roadmap.from_dict(normalize_payload(payload))
    except RoadmapShapeError as e:
        return RoadmapValidationResult(valid=False, errors=list(e.errors))

    return RoadmapValidationResult(valid=True, data=roadmap)


def parse_roadmap_response(text: str) -> Roadmap:
    """Parse a model response into a Roadmap.

    Raises:
        RoadmapValidationError: If the response is empty, not JSON, or not
            roadmap-shaped.
    """
    result = validate_roadmap_payload(text)
    if not result.valid or result.data is None:
        logger.warning("Roadmap response failed validation: %s", result.errors)
        raise RoadmapValidationError(result.errors)
    stages = result.data.stages
    logger.info(
        "Parsed roadmap: %d stages, %d tasks",
        len(stages),
        sum(len(s.tasks) for s in stages),
    )
    return result.data
