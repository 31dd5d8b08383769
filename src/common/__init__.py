"""Shared keyboard and logging helpers for tap-capture."""
