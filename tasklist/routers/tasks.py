from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from ..schemas.task import TaskCreate, TaskResponse, TaskSummary, TaskUpdate
from ..store import TaskStore, get_task_store

router = APIRouter()

# Store calls are synchronous and may do network I/O (redis backend), so the
# handlers are plain functions and run in FastAPI's threadpool.
# TaskNotFoundError / InvalidTaskError propagate to the handlers in main.py.


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    completed: Optional[bool] = Query(None, description="Filter by completion flag"),
    search: Optional[str] = Query(None, min_length=1, max_length=100, description="Search in title and description"),
    store: TaskStore = Depends(get_task_store),
):
    """List tasks in creation order"""
    return [TaskResponse.model_validate(task) for task in store.list(completed=completed, search=search)]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, store: TaskStore = Depends(get_task_store)):
    """Create a new task"""
    task = store.create(task_data.title, task_data.description)
    return TaskResponse.model_validate(task)


@router.get("/summary", response_model=TaskSummary)
def get_summary(store: TaskStore = Depends(get_task_store)):
    """Completed/pending counts across all tasks"""
    return TaskSummary(**store.summary())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Get a specific task by ID"""
    return TaskResponse.model_validate(store.get(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, task_update: TaskUpdate, store: TaskStore = Depends(get_task_store)):
    """Update the fields present in the request body"""
    update_data = task_update.model_dump(exclude_unset=True)
    return TaskResponse.model_validate(store.update(task_id, update_data))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    """Delete a task"""
    store.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
