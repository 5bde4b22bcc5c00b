import pytest

from application.ports.storage import ObjectNotFound, StoragePortError
from infrastructure.adapters.storage_port import StorageProviderPortAdapter
from infrastructure.external.storage import (
    NotFoundError,
    PermissionDeniedError,
    PresignedRequest,
    UploadResult,
)
from infrastructure.external.storage.utils import (
    LoggingMiddleware,
    MiddlewareStorage,
    StorageMiddleware,
    apply_middleware,
)


class StubProvider:
    def __init__(self, error=None):
        self.error = error

    async def upload(self, file, key, metadata=None, content_type=None):
        if self.error:
            raise self.error
        return UploadResult(key=key, etag="e1", size=len(file), content_type=content_type)

    async def exists(self, key):
        if self.error:
            raise self.error
        return True

    async def generate_presigned_url(self, key, expires_in=900, method="GET"):
        if self.error:
            raise self.error
        return PresignedRequest(url=f"http://minio.test:9000/documents/{key}", method=method, expires_in=expires_in)

    async def health_check(self):
        return True


class RecordingMiddleware(StorageMiddleware):
    def __init__(self):
        self.errors = []

    async def on_error(self, error, operation, **kwargs):
        self.errors.append((operation, type(error).__name__, kwargs.get("key")))


@pytest.mark.asyncio
async def test_adapter_maps_models():
    adapter = StorageProviderPortAdapter(apply_middleware(StubProvider(), [LoggingMiddleware()]))

    outcome = await adapter.upload(b"abc", "general/k", content_type="text/plain")
    presigned = await adapter.generate_presigned_url("general/k", 900)

    assert (outcome.key, outcome.etag, outcome.size) == ("general/k", "e1", 3)
    assert presigned.url.endswith("/documents/general/k")
    assert presigned.expires_in == 900
    assert await adapter.exists("general/k") is True


@pytest.mark.asyncio
async def test_adapter_translates_not_found():
    adapter = StorageProviderPortAdapter(StubProvider(error=NotFoundError("missing", key="k")))

    with pytest.raises(ObjectNotFound):
        await adapter.generate_presigned_url("k", 900)


@pytest.mark.asyncio
async def test_adapter_translates_other_storage_errors():
    adapter = StorageProviderPortAdapter(StubProvider(error=PermissionDeniedError("denied")))

    with pytest.raises(StoragePortError) as exc_info:
        await adapter.upload(b"x", "k")
    assert not isinstance(exc_info.value, ObjectNotFound)


@pytest.mark.asyncio
async def test_middleware_storage_notifies_errors():
    recorder = RecordingMiddleware()
    storage = MiddlewareStorage(StubProvider(error=PermissionDeniedError("denied")), [recorder])

    with pytest.raises(PermissionDeniedError):
        await storage.upload(b"x", "general/k")
    with pytest.raises(PermissionDeniedError):
        await storage.exists("general/k")

    assert recorder.errors == [
        ("upload", "PermissionDeniedError", "general/k"),
        ("exists", "PermissionDeniedError", "general/k"),
    ]


def test_apply_middleware_without_middlewares_returns_provider():
    provider = StubProvider()
    assert apply_middleware(provider, []) is provider
