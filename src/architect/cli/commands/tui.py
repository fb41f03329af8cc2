"""TUI launch command."""

from __future__ import annotations

import argparse

from architect.cli.context import load_store_or_error


def cmd_tui(args: argparse.Namespace) -> int:
    """Launch the TUI application on a roadmap file."""
    from architect.tui.app import ArchitectApp

    path = args.file
    store = load_store_or_error(path)
    if store is None:
        return 1
    app = ArchitectApp(store, path)
    app.run()
    return 0
