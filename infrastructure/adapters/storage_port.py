"""Infrastructure adapter that implements the application StoragePort
by delegating to the concrete StorageProvider and translating models
and exceptions.
"""
from __future__ import annotations

from typing import Optional

from application.ports.storage import (
    ObjectNotFound,
    PresignedURL,
    StoragePort,
    StoragePortError,
    UploadOutcome,
)
from infrastructure.external.storage import (
    NotFoundError,
    StorageError,
    StorageProvider,
)


class StorageProviderPortAdapter(StoragePort):
    def __init__(self, provider: StorageProvider):
        self.provider = provider

    async def upload(
        self,
        data: bytes,
        key: str,
        metadata: Optional[dict] = None,
        content_type: Optional[str] = None,
    ) -> UploadOutcome:
        try:
            result = await self.provider.upload(data, key, metadata=metadata, content_type=content_type)
        except StorageError as exc:
            raise _translate(exc) from exc
        return UploadOutcome(
            key=getattr(result, "key", key),
            etag=getattr(result, "etag", None),
            size=int(getattr(result, "size", len(data)) or 0),
            content_type=getattr(result, "content_type", content_type),
        )

    async def exists(self, key: str) -> bool:
        try:
            return await self.provider.exists(key)
        except StorageError as exc:
            raise _translate(exc) from exc

    async def generate_presigned_url(
        self,
        key: str,
        expires_in: int,
        method: str = "GET",
    ) -> PresignedURL:
        try:
            presigned = await self.provider.generate_presigned_url(key, expires_in, method)
        except StorageError as exc:
            raise _translate(exc) from exc
        return PresignedURL(
            url=getattr(presigned, "url", ""),
            method=getattr(presigned, "method", method),
            expires_in=int(getattr(presigned, "expires_in", expires_in) or expires_in),
            issued_at=presigned.issued_at,
        )


def _translate(exc: StorageError) -> StoragePortError:
    if isinstance(exc, NotFoundError):
        return ObjectNotFound(str(exc))
    return StoragePortError(str(exc))
