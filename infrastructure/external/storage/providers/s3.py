"""S3-compatible (MinIO) storage provider implementation."""
from typing import Optional, Any
import anyio
from functools import partial

from core.logging_config import get_logger
from ..config import StorageConfig
from ..models import UploadResult, PresignedRequest
from ..exceptions import (
    StorageError,
    NotFoundError,
    PermissionDeniedError,
    TransientError,
    ConfigurationError,
)

logger = get_logger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}
_DENIED_CODES = {"AccessDenied", "403", "InvalidAccessKeyId", "SignatureDoesNotMatch"}
_TRANSIENT_CODES = {"RequestTimeout", "SlowDown", "ServiceUnavailable", "503"}


class S3Provider:
    """Storage provider backed by a boto3 S3 client."""

    def __init__(
        self,
        client: Any,  # boto3 S3 client
        config: StorageConfig
    ):
        """Initialize S3 provider.

        Args:
            client: Boto3 S3 client instance
            config: Storage configuration
        """
        self.client = client
        self.config = config
        self.bucket = config.bucket

    async def upload(
        self,
        file: bytes,
        key: str,
        metadata: Optional[dict] = None,
        content_type: Optional[str] = None
    ) -> UploadResult:
        """Write one object (PUT) to the configured bucket."""
        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type
        if metadata:
            extra_args["Metadata"] = metadata

        try:
            # boto3 is synchronous; keep the event loop free
            response = await anyio.to_thread.run_sync(
                partial(
                    self.client.put_object,
                    Bucket=self.bucket,
                    Key=key,
                    Body=file,
                    **extra_args
                )
            )
        except Exception as e:
            self._handle_exception(e, "upload", key)

        etag = (response or {}).get("ETag", "").strip('"') or None
        logger.info("Uploaded to S3", key=key, size=len(file))
        return UploadResult(
            key=key,
            etag=etag,
            size=len(file),
            content_type=content_type
        )

    async def exists(self, key: str) -> bool:
        """Check if object exists (HEAD)."""
        try:
            await anyio.to_thread.run_sync(
                partial(
                    self.client.head_object,
                    Bucket=self.bucket,
                    Key=key
                )
            )
            return True
        except Exception as e:
            if self._error_code(e) in ("404", "NoSuchKey", "NotFound"):
                return False
            self._handle_exception(e, "exists", key)

    async def generate_presigned_url(
        self,
        key: str,
        expires_in: int = 900,
        method: str = "GET",
    ) -> PresignedRequest:
        """Generate a presigned URL.

        Signing is local; a minted URL does not prove the object exists.
        """
        client_methods = {"GET": "get_object", "PUT": "put_object"}
        if method not in client_methods:
            raise ValueError(f"Unsupported method: {method}")
        try:
            url = await anyio.to_thread.run_sync(
                partial(
                    self.client.generate_presigned_url,
                    ClientMethod=client_methods[method],
                    Params={"Bucket": self.bucket, "Key": key},
                    ExpiresIn=expires_in
                )
            )
        except Exception as e:
            self._handle_exception(e, "generate presigned URL", key)
        return PresignedRequest(url=url, method=method, expires_in=expires_in)

    async def health_check(self) -> bool:
        """Check bucket reachability."""
        try:
            await anyio.to_thread.run_sync(
                partial(
                    self.client.head_bucket,
                    Bucket=self.bucket
                )
            )
            logger.info("S3 health check passed", bucket=self.bucket)
            return True
        except Exception as e:
            logger.error("S3 health check failed", bucket=self.bucket, error=str(e))
            return False

    @staticmethod
    def _error_code(e: Exception) -> str:
        response = getattr(e, "response", None) or {}
        return str(response.get("Error", {}).get("Code", ""))

    def _handle_exception(self, e: Exception, operation: str, key: str) -> None:
        """Map botocore exceptions to storage exceptions."""
        error_code = self._error_code(e)
        kwargs = {"operation": operation, "key": key, "code": error_code or None}

        if error_code in _NOT_FOUND_CODES:
            raise NotFoundError(f"Object not found: {operation} {key}", **kwargs) from e
        if error_code in _DENIED_CODES:
            raise PermissionDeniedError(f"Access denied: {operation} {key}", **kwargs) from e
        if error_code in _TRANSIENT_CODES:
            raise TransientError(f"Transient error: {operation} {key}: {e}", **kwargs) from e
        raise StorageError(f"S3 error during {operation} {key}: {e}", **kwargs) from e


def create_s3_client(config: StorageConfig) -> Any:
    """Create a boto3 S3 client for an S3-compatible endpoint.

    Path-style addressing is forced because MinIO does not serve
    virtual-hosted buckets by default.
    """
    try:
        import boto3
        from botocore.config import Config as BotoConfig
    except ImportError:
        raise ConfigurationError("boto3 is required for S3 storage")

    config_args = {
        "region_name": config.region,
        "signature_version": "s3v4",
        "s3": {"addressing_style": "path"},
        # Nothing is retried automatically
        "retries": {"max_attempts": 1, "mode": "standard"},
    }
    if config.connect_timeout is not None:
        config_args["connect_timeout"] = config.connect_timeout
    if config.read_timeout is not None:
        config_args["read_timeout"] = config.read_timeout

    return boto3.client(
        service_name="s3",
        endpoint_url=config.endpoint_url,
        use_ssl=config.use_ssl,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        config=BotoConfig(**config_args),
    )


async def build_s3_provider(config: StorageConfig) -> S3Provider:
    """Build S3 storage provider.

    Args:
        config: Storage configuration

    Returns:
        Configured S3 provider instance
    """
    provider = S3Provider(create_s3_client(config), config)

    if config.verify_on_startup and not await provider.health_check():
        raise ConfigurationError(
            f"Failed to reach bucket '{config.bucket}' at {config.endpoint_url}"
        )

    return provider
