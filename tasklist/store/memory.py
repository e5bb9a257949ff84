"""
In-memory task store.

The collection lives for the lifetime of the process; nothing is persisted.
"""
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional

from ..core.errors import TaskNotFoundError
from ..models.task import Task
from .base import TaskStore, apply_changes, matches, validate_changes, validate_title

logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    """Dict-backed store guarded by a single mutex"""

    backend_name = "memory"

    def __init__(self):
        # dicts keep insertion order, which is the listing order
        self._tasks: Dict[str, Task] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._tasks)

    def list(self, completed: Optional[bool] = None, search: Optional[str] = None) -> List[Task]:
        with self._lock:
            return [
                task.copy()
                for task in self._tasks.values()
                if matches(task, completed=completed, search=search)
            ]

    def create(self, title: str, description: Optional[str] = None) -> Task:
        validate_title(title)
        task = Task(title=title, description=description)
        with self._lock:
            # never overwrite an existing id
            while task.id in self._tasks:
                task = Task(title=title, description=description)
            self._tasks[task.id] = task
            created = task.copy()
        logger.info(f"Created task {created.id}")
        return created

    def get(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.debug(f"Task {task_id} not found")
                raise TaskNotFoundError(task_id)
            return task.copy()

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        checked = validate_changes(changes)
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.debug(f"Task {task_id} not found for update")
                raise TaskNotFoundError(task_id)
            updated = apply_changes(task, checked)
            self._tasks[task_id] = updated
            result = updated.copy()
        logger.info(f"Updated task {task_id} fields={sorted(checked)}")
        return result

    def delete(self, task_id: str) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                logger.debug(f"Task {task_id} not found for delete")
                raise TaskNotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()
