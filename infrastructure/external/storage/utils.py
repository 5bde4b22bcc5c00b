"""Storage wrapper that runs middleware hooks around provider calls."""
import time
from typing import Any, Optional

from core.logging_config import get_logger
from .base import StorageProvider
from .models import UploadResult, PresignedRequest

logger = get_logger(__name__)


class StorageMiddleware:
    """Hooks invoked by :class:`MiddlewareStorage` for every operation.

    ``operation`` is one of ``upload``, ``exists`` or ``generate_presigned_url``.
    """

    async def before(self, operation: str, key: str, **info: Any) -> None:
        pass

    async def after(self, operation: str, key: str, result: Any, elapsed_ms: float) -> None:
        pass

    async def on_error(self, error: Exception, operation: str, **kwargs) -> None:
        pass


class LoggingMiddleware(StorageMiddleware):
    """Structured logs for storage operations.

    Uploads log start and completion at info level; lookups and presigning
    only log at debug level since they run on every download request.
    """

    async def before(self, operation: str, key: str, **info: Any) -> None:
        if operation == "upload":
            logger.info("storage_upload_started", key=key, **info)

    async def after(self, operation: str, key: str, result: Any, elapsed_ms: float) -> None:
        if isinstance(result, UploadResult):
            logger.info(
                "storage_upload_completed",
                key=key,
                size=result.size,
                etag=result.etag,
                elapsed_ms=round(elapsed_ms, 2),
            )
        else:
            logger.debug(
                "storage_operation_completed",
                operation=operation,
                key=key,
                elapsed_ms=round(elapsed_ms, 2),
            )

    async def on_error(self, error: Exception, operation: str, **kwargs) -> None:
        logger.error(
            "storage_operation_failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            code=getattr(error, "code", None),
            **kwargs
        )


class MiddlewareStorage:
    """StorageProvider wrapper; every call passes through the middlewares."""

    def __init__(
        self,
        provider: StorageProvider,
        middlewares: list[StorageMiddleware]
    ):
        self.provider = provider
        self.middlewares = middlewares

    @property
    def config(self):
        return getattr(self.provider, "config", None)

    async def upload(
        self,
        file: bytes,
        key: str,
        metadata: Optional[dict] = None,
        content_type: Optional[str] = None
    ) -> UploadResult:
        return await self._run(
            "upload",
            key,
            lambda: self.provider.upload(file, key, metadata, content_type),
            size=len(file),
            content_type=content_type,
        )

    async def exists(self, key: str) -> bool:
        return await self._run("exists", key, lambda: self.provider.exists(key))

    async def generate_presigned_url(
        self,
        key: str,
        expires_in: int = 900,
        method: str = "GET",
    ) -> PresignedRequest:
        return await self._run(
            "generate_presigned_url",
            key,
            lambda: self.provider.generate_presigned_url(key, expires_in, method),
            expires_in=expires_in,
            method=method,
        )

    async def health_check(self) -> bool:
        return await self.provider.health_check()

    async def _run(self, operation: str, key: str, call, **info: Any):
        for middleware in self.middlewares:
            await middleware.before(operation, key, **info)

        start = time.perf_counter()
        try:
            result = await call()
        except Exception as e:
            for middleware in self.middlewares:
                await middleware.on_error(e, operation, key=key)
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000

        for middleware in self.middlewares:
            await middleware.after(operation, key, result, elapsed_ms)
        return result


def apply_middleware(
    provider: StorageProvider,
    middlewares: list[StorageMiddleware]
) -> StorageProvider:
    """Wrap ``provider`` so ``middlewares`` see each call; no-op when empty."""
    if not middlewares:
        return provider

    return MiddlewareStorage(provider, middlewares)
