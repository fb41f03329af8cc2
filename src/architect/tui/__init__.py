"""Textual board for Architect roadmaps."""
