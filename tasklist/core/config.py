"""
Configuration settings for Task List Service.
"""
import os
from typing import List
from dotenv import load_dotenv

from .. import __version__

# Load environment variables
load_dotenv()

STORE_BACKENDS = ("memory", "redis")


class Settings:
    """Application settings, read from the environment at construction time"""

    def __init__(self):
        # Service information
        self.service_name: str = os.getenv("SERVICE_NAME", "task_list_service")
        self.service_version: str = os.getenv("SERVICE_VERSION", __version__)
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server
        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "3000"))

        # API configuration
        self.api_prefix: str = os.getenv("API_PREFIX", "/api").rstrip("/")

        # CORS configuration
        self.allowed_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
            if origin.strip()
        ]

        # Task store
        self.task_store_backend: str = os.getenv("TASK_STORE_BACKEND", "memory").lower()
        self.redis_url: str = os.getenv("REDIS_URL", "redis://127.0.0.1:6379")

        if self.task_store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"TASK_STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, "
                f"got {self.task_store_backend!r}"
            )

    def __repr__(self):
        return (
            f"Settings(service_name={self.service_name!r}, api_prefix={self.api_prefix!r}, "
            f"task_store_backend={self.task_store_backend!r})"
        )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
