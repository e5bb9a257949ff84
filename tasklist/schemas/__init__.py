# tasklist/schemas/__init__.py
"""Pydantic schemas shared by server and client."""
from .task import TaskCreate, TaskResponse, TaskSummary, TaskUpdate

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse", "TaskSummary"]
