"""Read-only roadmap commands."""

from __future__ import annotations

import argparse

from architect.cli.context import load_store_or_error
from architect.cli.render import render_roadmap, render_statistics


def cmd_show(args: argparse.Namespace) -> int:
    """Print a roadmap with status marks."""
    store = load_store_or_error(args.file)
    if store is None:
        return 1
    print(render_roadmap(store))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Print overall and per-stage statistics."""
    store = load_store_or_error(args.file)
    if store is None:
        return 1
    print(render_statistics(store))
    return 0
