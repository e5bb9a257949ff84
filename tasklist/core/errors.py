"""
Error types shared by the task store, the HTTP layer and the client.
"""
from typing import Optional


class TaskError(Exception):
    """Base class for task errors"""


class TaskNotFoundError(TaskError):
    """Raised when an operation references a task id that does not exist"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class InvalidTaskError(TaskError):
    """Raised when task input is malformed (blank title, unknown field, ...)"""


class TaskClientError(TaskError):
    """Request rejected by the server, or by TaskClient before sending"""

    def __init__(self, status_code: Optional[int], message: str, payload: Optional[dict] = None):
        # status_code is None when the request was rejected before sending
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}
        prefix = f"HTTP {status_code}" if status_code is not None else "Invalid request"
        super().__init__(f"{prefix}: {message}")
