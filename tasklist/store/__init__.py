"""
Task store backends and the FastAPI dependency that hands them to routes.
"""
import logging

from fastapi import Request

from .base import TaskStore
from .memory import InMemoryTaskStore
from .redis_store import RedisTaskStore

logger = logging.getLogger(__name__)

__all__ = ["TaskStore", "InMemoryTaskStore", "RedisTaskStore", "build_task_store", "get_task_store"]


def build_task_store(settings) -> TaskStore:
    """Create the backend named by ``settings.task_store_backend``"""
    if settings.task_store_backend == "redis":
        logger.info("Using Redis task store")
        return RedisTaskStore.from_url(settings.redis_url)
    logger.info("Using in-memory task store")
    return InMemoryTaskStore()


def get_task_store(request: Request) -> TaskStore:
    """
    Task store dependency for FastAPI

    Returns:
        TaskStore: the store owned by the running application
    """
    return request.app.state.task_store
