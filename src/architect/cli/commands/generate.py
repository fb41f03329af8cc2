"""Generate command: goal in, roadmap file out."""

from __future__ import annotations

import argparse
import asyncio
import sys

from architect.cli.context import save_store
from architect.cli.render import render_statistics
from architect.generation import RoadmapGenerationError, RoadmapGenerator


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a roadmap for a goal and write it to a JSON file."""
    goal = args.goal.strip()
    if not goal:
        print("Error: Goal must not be empty", file=sys.stderr)
        return 1

    print(f"Generating roadmap for: {goal}")
    generator = RoadmapGenerator()
    try:
        store = asyncio.run(generator.generate(goal))
    except RoadmapGenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not save_store(store, args.output):
        return 1

    print()
    print(store.summary)
    print()
    print(render_statistics(store))
    print()
    print(f"Saved to {args.output}")
    return 0
