"""Helpers shared by CLI command groups."""
