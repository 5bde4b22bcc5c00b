"""Domain-level business exceptions shared by the domain and application layers.

The core layer only maps these to HTTP responses; the domain layer must not
depend on core.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base business exception."""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class DomainValidationException(BusinessException):
    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=message,
            error_type="DomainValidationError",
            details=details,
            field=field,
        )


class NoFileUploadedException(BusinessException):
    def __init__(self):
        super().__init__(
            code=BusinessCode.PARAM_MISSING,
            message="No file uploaded.",
            error_type="NoFileUploaded",
            field="document",
        )


class InvalidDocumentKeySegmentException(BusinessException):
    def __init__(self, field: str, value: str):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=f"Invalid {field}.",
            error_type="InvalidDocumentKeySegment",
            details={
                "field": field,
                "value": value,
                "allowed": "letters, digits, '_', '-' and '.' (max 64 chars, no leading punctuation)",
            },
            field=field,
        )


class InvalidDocumentKeyException(BusinessException):
    def __init__(self, key: str):
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message="Invalid document key.",
            error_type="InvalidDocumentKey",
            details={"key": key},
            field="key",
        )


class DocumentNotFoundException(BusinessException):
    def __init__(self, key: Optional[str] = None):
        super().__init__(
            code=BusinessCode.DOCUMENT_NOT_FOUND,
            message="Document not found.",
            error_type="DocumentNotFound",
        )
        # Kept for logging only; never rendered to the caller.
        self.key = key


class DocumentUploadFailedException(BusinessException):
    def __init__(self):
        super().__init__(
            code=BusinessCode.STORAGE_WRITE_FAILED,
            message="Failed to upload file.",
            error_type="StorageWriteFailed",
        )


class DownloadLinkFailedException(BusinessException):
    def __init__(self):
        super().__init__(
            code=BusinessCode.STORAGE_READ_FAILED,
            message="Failed to get download link.",
            error_type="DownloadLinkFailed",
        )


class UnsupportedMimeTypeException(BusinessException):
    def __init__(self, mime_type: str):
        super().__init__(
            code=BusinessCode.UNSUPPORTED_MEDIA_TYPE,
            message="Unsupported MIME type.",
            error_type="UnsupportedMimeType",
            details={"mime_type": mime_type},
            field="document",
        )


class FileTooLargeException(BusinessException):
    def __init__(self, size: int, max_size: int):
        super().__init__(
            code=BusinessCode.FILE_TOO_LARGE,
            message="File too large.",
            error_type="FileTooLarge",
            details={"size": size, "max_size": max_size},
            field="document",
        )
