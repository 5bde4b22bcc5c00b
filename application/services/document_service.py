"""Application layer orchestration for document upload and download links."""
from __future__ import annotations

from typing import Optional

from application.dto import DocumentUploadResponseDTO, DownloadUrlResponseDTO
from application.ports.storage import ObjectNotFound, StoragePort, StoragePortError
from application.utils.storage import ascii_metadata_value, guess_content_type
from core.config import DocumentSettings, StorageSettings, settings
from core.logging_config import get_logger
from domain.common.exceptions import (
    DocumentNotFoundException,
    DocumentUploadFailedException,
    DownloadLinkFailedException,
    FileTooLargeException,
    UnsupportedMimeTypeException,
)
from domain.document import DocumentObject, build_document_key, parse_document_key

logger = get_logger(__name__)


class DocumentApplicationService:
    """Document workflows bridging the API and the object store."""

    def __init__(
        self,
        storage: StoragePort,
        document_settings: Optional[DocumentSettings] = None,
        storage_settings: Optional[StorageSettings] = None,
    ):
        self._storage = storage
        self._documents = document_settings or settings.documents
        self._storage_settings = storage_settings or settings.storage

    async def upload_document(
        self,
        *,
        file_bytes: bytes,
        original_name: str,
        content_type: Optional[str] = None,
        document_type: Optional[str] = None,
        related_record_id: Optional[str] = None,
    ) -> DocumentUploadResponseDTO:
        """Store one document under a freshly generated key.

        Raises:
            InvalidDocumentKeySegmentException: documentType/relatedRecordId unsafe
            FileTooLargeException / UnsupportedMimeTypeException: only when
                upload validation is enabled
            DocumentUploadFailedException: the store rejected the write
        """
        ctype = content_type or guess_content_type(original_name)
        self._validate_upload(len(file_bytes), ctype)

        doc_type = (document_type or "").strip() or self._documents.default_type
        key = build_document_key(
            doc_type,
            related_record_id,
            original_name,
        )

        try:
            outcome = await self._storage.upload(
                file_bytes,
                key,
                metadata={"original-name": ascii_metadata_value(original_name)},
                content_type=ctype,
            )
        except StoragePortError as exc:
            # Full detail stays in the logs, the caller only sees a generic message
            logger.error(
                "document_upload_failed",
                key=key,
                document_type=doc_type,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise DocumentUploadFailedException() from exc

        document = DocumentObject(
            key=outcome.key,
            original_name=original_name,
            size=len(file_bytes),
            mime_type=ctype,
        )
        logger.info("document_uploaded", key=document.key, size=document.size, mimetype=document.mime_type)
        return DocumentUploadResponseDTO(
            key=document.key,
            original_name=document.original_name,
            size=document.size,
            mimetype=document.mime_type,
        )

    async def get_download_url(self, key: str) -> DownloadUrlResponseDTO:
        """Mint a short-lived presigned GET URL for ``key``.

        Raises:
            InvalidDocumentKeyException: key was not produced by this service
            DocumentNotFoundException: the store reports no such object
            DownloadLinkFailedException: any other storage failure
        """
        parse_document_key(key)
        ttl = self._documents.download_url_ttl

        try:
            if self._documents.verify_exists and not await self._storage.exists(key):
                raise ObjectNotFound(key)
            presigned = await self._storage.generate_presigned_url(key, expires_in=ttl, method="GET")
        except ObjectNotFound as exc:
            logger.warning("document_not_found", key=key)
            raise DocumentNotFoundException(key) from exc
        except StoragePortError as exc:
            logger.error(
                "download_url_failed",
                key=key,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise DownloadLinkFailedException() from exc

        logger.info("download_url_issued", key=key, expires_in=presigned.expires_in)
        return DownloadUrlResponseDTO(
            download_url=presigned.url,
            expires_in=presigned.expires_in,
            expires_at=presigned.expires_at,
        )

    def _validate_upload(self, size: int, content_type: str) -> None:
        s = self._storage_settings
        if not s.validation_enabled:
            return
        if s.max_file_size and size > s.max_file_size:
            raise FileTooLargeException(size=size, max_size=s.max_file_size)
        if s.allowed_types and content_type not in s.allowed_types:
            raise UnsupportedMimeTypeException(content_type)
