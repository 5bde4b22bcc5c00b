"""
API dependencies - storage and application services
"""
from fastapi import Depends

from application.ports.storage import StoragePort
from application.services.document_service import DocumentApplicationService
from core.config import settings
from infrastructure.adapters.storage_port import StorageProviderPortAdapter
from infrastructure.external.storage import StorageProvider, get_storage


async def get_storage_port(provider: StorageProvider = Depends(get_storage)) -> StoragePort:
    return StorageProviderPortAdapter(provider)


async def get_document_service(
    storage: StoragePort = Depends(get_storage_port),
) -> DocumentApplicationService:
    return DocumentApplicationService(
        storage=storage,
        document_settings=settings.documents,
        storage_settings=settings.storage,
    )
