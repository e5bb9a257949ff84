# tasklist/core/__init__.py
"""Core modules for Task List Service."""
