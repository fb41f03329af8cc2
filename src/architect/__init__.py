"""Architect: turn a goal into a staged, trackable roadmap."""

__version__ = "0.1.0"
