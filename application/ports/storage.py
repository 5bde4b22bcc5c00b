"""Application-owned storage port abstraction (hexagonal architecture).

Defines the minimal methods needed by the document use cases so that
the application layer does not depend on infrastructure details.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, runtime_checkable
from dataclasses import dataclass, field


class StoragePortError(Exception):
    """Any storage failure surfaced through the port."""


class ObjectNotFound(StoragePortError):
    """The store reported that the requested object does not exist."""


@dataclass
class PresignedURL:
    url: str
    method: str = "GET"
    expires_in: int = 0
    issued_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in)


@dataclass
class UploadOutcome:
    key: str
    etag: Optional[str]
    size: int
    content_type: Optional[str] = None


@runtime_checkable
class StoragePort(Protocol):
    async def upload(
        self,
        data: bytes,
        key: str,
        metadata: Optional[dict] = None,
        content_type: Optional[str] = None,
    ) -> UploadOutcome: ...

    async def exists(self, key: str) -> bool: ...

    async def generate_presigned_url(
        self,
        key: str,
        expires_in: int,
        method: str = "GET",
    ) -> PresignedURL: ...
