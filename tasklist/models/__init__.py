# tasklist/models/__init__.py
"""Stored task records."""
from .task import Task

__all__ = ["Task"]
