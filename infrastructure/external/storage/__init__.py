"""Storage service entry point and lifecycle management.

The storage client is built explicitly at startup and stored on
``app.state.storage``; request handlers receive it through the
``get_storage`` dependency instead of a module-level singleton.
"""
from typing import Optional

from fastapi import Request

from core.config import Settings
from core.logging_config import get_logger
from .base import StorageProvider
from .config import StorageConfig, StorageType
from .factory import create_provider
from .utils import LoggingMiddleware, apply_middleware

logger = get_logger(__name__)


def get_storage_config(settings: Settings) -> StorageConfig:
    """Assemble StorageConfig from application settings.

    Raises:
        ConfigurationError: If credentials or bucket are missing
    """
    s = settings.storage
    return StorageConfig(
        type=s.type or StorageType.S3,
        endpoint=s.endpoint,
        port=s.port,
        use_ssl=s.use_ssl,
        access_key=s.access_key,
        secret_key=s.secret_key,
        bucket=s.bucket,
        region=s.region,
        connect_timeout=s.connect_timeout,
        read_timeout=s.read_timeout,
        verify_on_startup=s.verify_on_startup,
    )


async def init_storage_client(config: StorageConfig) -> StorageProvider:
    """Create the storage provider for ``config`` wrapped with logging middleware."""
    try:
        provider = await create_provider(config)
    except Exception as e:
        logger.error("Failed to initialize storage client", error=str(e))
        raise

    client = apply_middleware(provider, [LoggingMiddleware()])
    logger.info(
        "Storage client initialized",
        provider=config.type,
        bucket=config.bucket,
    )
    return client


def get_storage(request: Request) -> StorageProvider:
    """FastAPI dependency for the storage client.

    Raises:
        RuntimeError: If storage was not initialized during startup
    """
    client: Optional[StorageProvider] = getattr(request.app.state, "storage", None)
    if client is None:
        raise RuntimeError(
            "Storage client not initialized. "
            "Call init_storage_client() during startup."
        )
    return client


# Export public interface
__all__ = [
    # Lifecycle
    "init_storage_client",
    "get_storage",

    # Configuration
    "get_storage_config",
    "StorageConfig",
    "StorageType",

    # Base types
    "StorageProvider",

    # Models
    "UploadResult",
    "PresignedRequest",

    # Exceptions
    "StorageError",
    "NotFoundError",
    "PermissionDeniedError",
    "TransientError",
    "ConfigurationError",
]

from .models import UploadResult, PresignedRequest
from .exceptions import (
    StorageError,
    NotFoundError,
    PermissionDeniedError,
    TransientError,
    ConfigurationError,
)