"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from architect.models import RoadmapShapeError, RoadmapStore

logger = logging.getLogger(__name__)


def load_store_or_error(path: Path) -> RoadmapStore | None:
    """Load a roadmap file or print a user-facing error and return None."""
    if not path.exists():
        print(f"Error: Roadmap file '{path}' not found", file=sys.stderr)
        return None

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not read '{path}': {e}", file=sys.stderr)
        return None

    try:
        return RoadmapStore.from_json(text)
    except RoadmapShapeError as e:
        print(f"Error: '{path}' is not a valid roadmap", file=sys.stderr)
        for error in e.errors[:10]:
            print(f"  {error}", file=sys.stderr)
        if len(e.errors) > 10:
            print(f"  ... and {len(e.errors) - 10} more", file=sys.stderr)
        return None


def save_store(store: RoadmapStore, path: Path) -> bool:
    """Write a roadmap file, printing a user-facing error on failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(store.to_json() + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error: Could not write '{path}': {e}", file=sys.stderr)
        return False
    logger.info("Saved roadmap to %s", path)
    return True
