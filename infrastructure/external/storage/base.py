"""Storage provider protocol definitions."""
from typing import Protocol, Optional, runtime_checkable

from .models import UploadResult, PresignedRequest


@runtime_checkable
class StorageProvider(Protocol):
    """Core storage provider protocol for duck typing."""

    async def upload(
        self,
        file: bytes,
        key: str,
        metadata: Optional[dict] = None,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """Upload file to storage."""
        ...

    async def exists(self, key: str) -> bool:
        """Check if file exists in storage."""
        ...

    async def generate_presigned_url(
        self,
        key: str,
        expires_in: int = 900,
        method: str = "GET",
    ) -> PresignedRequest:
        """Generate presigned URL for direct access."""
        ...

    async def health_check(self) -> bool:
        """Check storage connectivity and permissions."""
        ...
