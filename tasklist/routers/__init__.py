# tasklist/routers/__init__.py
"""API routers for Task List Service."""
