# tasklist/__init__.py
"""Task List Service - in-memory task CRUD over REST with a shared-schema client."""

__version__ = "1.0.0"
__author__ = "Task Manager Team"
