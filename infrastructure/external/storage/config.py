"""Storage configuration models."""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, model_validator

from .exceptions import ConfigurationError


class StorageType(str, Enum):
    """Storage provider types."""
    S3 = "s3"


class StorageConfig(BaseModel):
    """Storage configuration model.

    Targets an S3-compatible store (MinIO) reachable at ``endpoint:port``.
    Credentials and bucket are required; an incomplete configuration fails
    at construction instead of falling back to empty credentials.
    """
    type: StorageType = StorageType.S3
    endpoint: str = "localhost"
    port: int = 9000
    use_ssl: bool = False
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    bucket: Optional[str] = None
    region: str = "us-east-1"  # MinIO ignores it but SigV4 needs one

    # Advanced settings (None -> botocore defaults)
    connect_timeout: Optional[float] = None
    read_timeout: Optional[float] = None
    verify_on_startup: bool = True

    model_config = {"use_enum_values": True}

    @model_validator(mode="after")
    def _require_credentials(self):
        missing = [
            name
            for name in ("access_key", "secret_key", "bucket")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Storage configuration incomplete, missing: {', '.join(missing)}"
            )
        if not self.endpoint.strip():
            raise ConfigurationError("Storage endpoint is required")
        return self

    @property
    def endpoint_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}:{self.port}"
