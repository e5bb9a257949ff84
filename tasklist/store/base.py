"""
Task store contract and the validation rules shared by every backend.
"""
import abc
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..core.errors import InvalidTaskError
from ..models.task import Task, utcnow

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "completed")


def validate_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise InvalidTaskError("Task title must be a non-empty string")
    return title


def validate_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Check a partial update before any task is touched"""
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidTaskError(f"Unknown task fields: {', '.join(sorted(unknown))}")

    checked = dict(changes)
    if "title" in checked:
        validate_title(checked["title"])
    if "description" in checked and checked["description"] is not None:
        if not isinstance(checked["description"], str):
            raise InvalidTaskError("Task description must be a string or null")
    if "completed" in checked and not isinstance(checked["completed"], bool):
        raise InvalidTaskError("Task completed flag must be a boolean")
    return checked


def apply_changes(task: Task, changes: Dict[str, Any]) -> Task:
    """Return an updated copy of ``task``; an empty change set is a no-op"""
    updated = task.copy()
    if not changes:
        return updated
    for field_name, value in changes.items():
        setattr(updated, field_name, value)
    updated.updated_at = utcnow()
    return updated


def matches(task: Task, completed: Optional[bool] = None, search: Optional[str] = None) -> bool:
    if completed is not None and task.completed != completed:
        return False
    if search:
        term = search.lower()
        haystack = [task.title, task.description or ""]
        if not any(term in text.lower() for text in haystack):
            return False
    return True


def summarize(tasks: Iterable[Task]) -> Dict[str, int]:
    tasks = list(tasks)
    total = len(tasks)
    done = sum(1 for task in tasks if task.completed)
    return {
        "total": total,
        "completed": done,
        "pending": total - done,
        "completion_rate": (done * 100) // total if total else 0,
    }


class TaskStore(abc.ABC):
    """
    Authoritative collection of tasks.

    Every method is atomic with respect to the others: implementations hold a
    lock for the whole read-modify-write and return copies, never the stored
    objects themselves. Missing ids raise TaskNotFoundError, malformed input
    raises InvalidTaskError; in both cases nothing is changed.
    """

    backend_name = "abstract"

    @abc.abstractmethod
    def list(self, completed: Optional[bool] = None, search: Optional[str] = None) -> List[Task]:
        """Snapshot of tasks in insertion order, optionally filtered"""

    @abc.abstractmethod
    def create(self, title: str, description: Optional[str] = None) -> Task:
        """Store a new task with a fresh id and completed=False"""

    @abc.abstractmethod
    def get(self, task_id: str) -> Task:
        """Return the task with ``task_id``"""

    @abc.abstractmethod
    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Apply a partial update and return the new state"""

    @abc.abstractmethod
    def delete(self, task_id: str) -> None:
        """Remove the task with ``task_id``"""

    @abc.abstractmethod
    def clear(self) -> None:
        """Remove every task"""

    def summary(self) -> Dict[str, int]:
        return summarize(self.list())

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        return
