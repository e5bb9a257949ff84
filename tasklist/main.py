"""
Task List Service - application module.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, get_settings
from .core.errors import InvalidTaskError, TaskNotFoundError
from .routers import tasks
from .store import TaskStore, build_task_store

logger = logging.getLogger(__name__)

QUIET_PATHS = {"/health"}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def error_response(request: Request, status_code: int, error_type: str, message: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "type": error_type,
                "status_code": status_code,
                "message": message,
                "path": str(request.url.path),
                "timestamp": time.time(),
            }
        }
    )


def _validation_messages(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(settings: Optional[Settings] = None, store: Optional[TaskStore] = None) -> FastAPI:
    """Build the application together with the task store it owns"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Report the configured store on startup, release it on shutdown"""
        task_store = app.state.task_store
        logger.info(f"Starting {settings.service_name} with {task_store.backend_name} task store...")
        if not task_store.ping():
            logger.warning("Task store is not reachable")
        logger.info(f"{settings.service_name} startup completed")
        yield
        logger.info(f"Shutting down {settings.service_name}...")
        task_store.close()

    app = FastAPI(
        title="Task List Service",
        description="Task list manager with CRUD over an in-memory task store",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = store if store is not None else build_task_store(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Process-Time"] = str(process_time)

        if request.url.path not in QUIET_PATHS:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")

        return response

    @app.exception_handler(TaskNotFoundError)
    async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
        return error_response(request, status.HTTP_404_NOT_FOUND, "not_found", str(exc))

    @app.exception_handler(InvalidTaskError)
    async def invalid_task_handler(request: Request, exc: InvalidTaskError):
        return error_response(request, status.HTTP_400_BAD_REQUEST, "bad_request", str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Rejected {request.method} {request.url.path}: malformed request")
        return error_response(request, status.HTTP_400_BAD_REQUEST, "bad_request", _validation_messages(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions"""
        return error_response(request, exc.status_code, "http_error", exc.detail)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            str(exc) if settings.debug else "Internal server error",
        )

    app.include_router(
        tasks.router,
        prefix=settings.api_prefix + "/tasks",
        tags=["tasks"]
    )

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
            "tasks": settings.api_prefix + "/tasks",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        store_healthy = app.state.task_store.ping()
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if store_healthy else "unhealthy",
            "store": {
                "backend": app.state.task_store.backend_name,
                "status": "connected" if store_healthy else "disconnected",
            },
            "timestamp": time.time(),
        }

    return app


configure_logging(get_settings().log_level)
app = create_app()


def run():
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "tasklist.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
