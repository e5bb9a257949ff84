"""
HTTP client for the Task List Service.

Speaks the same schemas as the server, so every response is parsed back into
TaskResponse / TaskSummary. Covers the actions of the task list UI: add,
toggle, edit, delete, plus listing and the summary figures.
"""
import logging
from typing import Any, Dict, List, Optional
import httpx
from pydantic import ValidationError

from .core.errors import TaskClientError, TaskNotFoundError
from .schemas.task import TaskCreate, TaskResponse, TaskSummary, TaskUpdate

logger = logging.getLogger(__name__)


class TaskClient:
    """
    Async client for the task REST API

    Raises TaskNotFoundError for unknown ids and TaskClientError for everything
    else, including payloads rejected locally before any request is sent.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_prefix: str = "/api",
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.tasks_path = api_prefix.rstrip("/") + "/tasks"
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        await self.client.aclose()

    async def _request(self, method: str, path: str, task_id: Optional[str] = None, **kwargs) -> httpx.Response:
        logger.debug(f"{method} {path}")
        response = await self.client.request(method, path, **kwargs)

        if response.status_code == 404 and task_id is not None:
            raise TaskNotFoundError(task_id)
        if response.is_error:
            payload = self._error_payload(response)
            message = payload.get("error", {}).get("message", response.reason_phrase)
            logger.warning(f"{method} {path} failed: {response.status_code} {message}")
            raise TaskClientError(response.status_code, str(message), payload)
        return response

    @staticmethod
    def _error_payload(response: httpx.Response) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    def _task_path(self, task_id: str) -> str:
        return f"{self.tasks_path}/{task_id}"

    async def list_tasks(self, completed: Optional[bool] = None, search: Optional[str] = None) -> List[TaskResponse]:
        params = {}
        if completed is not None:
            params["completed"] = "true" if completed else "false"
        if search:
            params["search"] = search
        response = await self._request("GET", self.tasks_path, params=params)
        return [TaskResponse.model_validate(item) for item in response.json()]

    async def create_task(self, title: str, description: Optional[str] = None) -> TaskResponse:
        try:
            payload = TaskCreate(title=title, description=description)
        except ValidationError as e:
            raise TaskClientError(None, str(e)) from e
        response = await self._request("POST", self.tasks_path, json=payload.model_dump())
        return TaskResponse.model_validate(response.json())

    async def get_task(self, task_id: str) -> TaskResponse:
        response = await self._request("GET", self._task_path(task_id), task_id=task_id)
        return TaskResponse.model_validate(response.json())

    async def update_task(self, task_id: str, **changes) -> TaskResponse:
        """Send only the given fields, e.g. ``update_task(id, title="New")``"""
        try:
            payload = TaskUpdate(**changes)
        except ValidationError as e:
            raise TaskClientError(None, str(e)) from e
        response = await self._request(
            "PUT",
            self._task_path(task_id),
            task_id=task_id,
            json=payload.model_dump(exclude_unset=True),
        )
        return TaskResponse.model_validate(response.json())

    async def toggle_task(self, task_id: str) -> TaskResponse:
        task = await self.get_task(task_id)
        return await self.update_task(task_id, completed=not task.completed)

    async def delete_task(self, task_id: str) -> None:
        await self._request("DELETE", self._task_path(task_id), task_id=task_id)

    async def summary(self) -> TaskSummary:
        response = await self._request("GET", self.tasks_path + "/summary")
        return TaskSummary.model_validate(response.json())

    async def health(self) -> Dict[str, Any]:
        response = await self._request("GET", "/health")
        return response.json()
