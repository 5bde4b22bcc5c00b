"""Storage data transfer objects."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """Upload operation result."""
    key: str
    etag: Optional[str] = None
    size: int
    content_type: Optional[str] = None


class PresignedRequest(BaseModel):
    """Presigned request for direct access."""
    url: str
    method: str = "GET"
    expires_in: int
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in)
