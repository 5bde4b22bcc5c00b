"""
Application configuration
"""
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Annotated, Optional


def _split_csv(v):
    """Accept ``a,b`` from the environment as well as a real list."""
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class StorageSettings(BaseModel):
    type: str = "s3"
    endpoint: str = "localhost"
    port: int = 9000
    use_ssl: bool = False
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    bucket: Optional[str] = None
    region: str = "us-east-1"
    # None keeps botocore defaults
    connect_timeout: Optional[float] = None
    read_timeout: Optional[float] = None
    verify_on_startup: bool = True
    # Optional relay-upload validation (off: rely on upstream limits)
    validation_enabled: bool = False
    max_file_size: int = 100 * 1024 * 1024  # 100MB
    # Comma separated in the environment, e.g. application/pdf,image/png
    allowed_types: Annotated[Optional[list[str]], NoDecode] = None

    @field_validator("allowed_types", mode="before")
    @classmethod
    def _split_allowed_types(cls, v):
        return _split_csv(v)


class DocumentSettings(BaseModel):
    default_type: str = "general"
    # Download links are always issued with this fixed TTL
    download_url_ttl: int = 900
    # HEAD the object before presigning so a missing key yields 404
    verify_exists: bool = True


class RateLimitSettings(BaseModel):
    enabled: bool = True
    storage_uri: str = "memory://"
    api_limit: str = "100/15 minutes"
    upload_limit: str = "20/hour"
    api_limit_message: str = "Too many requests from this IP, please try again after 15 minutes"
    upload_limit_message: str = "Upload limit reached, please try again later"
    trusted_ips: Annotated[list[str], NoDecode] = Field(default_factory=list)

    @field_validator("trusted_ips", mode="before")
    @classmethod
    def _split_trusted_ips(cls, v):
        return _split_csv(v)


class Settings(BaseSettings):
    """Project settings"""

    PROJECT_NAME: str = Field(
        default="Consular Document Service",
        validation_alias=AliasChoices("PROJECT_NAME", "APP_NAME"),
    )
    VERSION: str = Field(default="1.0.0", validation_alias=AliasChoices("VERSION", "APP_VERSION"))
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    documents: DocumentSettings = Field(default_factory=DocumentSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    # Legacy flat MinIO variables, folded into ``storage`` when set
    MINIO_ENDPOINT: Optional[str] = None
    MINIO_PORT: Optional[int] = None
    MINIO_USE_SSL: Optional[bool] = None
    MINIO_ACCESS_KEY: Optional[str] = None
    MINIO_SECRET_KEY: Optional[str] = None
    MINIO_BUCKET: Optional[str] = None
    # Legacy flat trusted proxy/client list, folded into ``rate_limit``
    TRUSTED_IPS: Annotated[Optional[list[str]], NoDecode] = None

    # CORS
    CORS_ORIGINS: Annotated[list, NoDecode] = Field(default=["http://localhost:3000", "http://localhost:5173"])

    # Request body logging
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = True
    LOG_REQUEST_BODY_MAX_BYTES: int = 2048
    LOG_REQUEST_BODY_ALLOW_MULTIPART: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    def model_post_init(self, __context) -> None:
        legacy = {
            "endpoint": self.MINIO_ENDPOINT,
            "port": self.MINIO_PORT,
            "use_ssl": self.MINIO_USE_SSL,
            "access_key": self.MINIO_ACCESS_KEY,
            "secret_key": self.MINIO_SECRET_KEY,
            "bucket": self.MINIO_BUCKET,
        }
        overrides = {k: v for k, v in legacy.items() if v is not None}
        if overrides:
            self.storage = self.storage.model_copy(update=overrides)
        if self.TRUSTED_IPS is not None:
            self.rate_limit = self.rate_limit.model_copy(update={"trusted_ips": self.TRUSTED_IPS})

    @field_validator("TRUSTED_IPS", mode="before")
    @classmethod
    def _split_trusted_ips(cls, v):
        return _split_csv(v)

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """Accept a JSON array string or a comma separated string."""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except ValueError:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


settings = Settings()
