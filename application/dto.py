"""
Data transfer objects between the application and presentation layers
"""
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from typing import Optional
from datetime import datetime, timezone


class DTOBase(BaseModel):
    """Base DTO: unify datetime serialization to UTC-Z for all subclasses."""

    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def _serialize_model(self, handler):  # type: ignore[override]
        data = handler(self)

        def convert(value):
            if isinstance(value, datetime):
                ts = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
                s = ts.astimezone(timezone.utc).isoformat()
                return s.replace("+00:00", "Z")
            if isinstance(value, list):
                return [convert(v) for v in value]
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(data)


class DocumentUploadResponseDTO(DTOBase):
    """Response payload after a document has been stored."""

    message: str = "File uploaded successfully"
    key: str
    original_name: str = Field(alias="originalName")
    size: int
    mimetype: str


class DownloadUrlResponseDTO(DTOBase):
    """Presigned download link for one document."""

    download_url: str = Field(alias="downloadUrl")
    expires_in: int = Field(alias="expiresIn")
    expires_at: Optional[datetime] = Field(default=None, exclude=True)

