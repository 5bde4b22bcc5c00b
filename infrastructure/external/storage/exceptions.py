"""Storage service exceptions.

Every provider failure surfaces as a ``StorageError`` subclass so callers
never have to know about botocore error shapes.
"""
from typing import Optional


class StorageError(Exception):
    """Base storage exception (kind ``StorageWriteFailed`` on upload)."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        key: Optional[str] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.key = key
        self.code = code


class NotFoundError(StorageError):
    """Object (or bucket) not found in storage."""


class PermissionDeniedError(StorageError):
    """Credentials rejected for the storage operation."""


class TransientError(StorageError):
    """Transient error (network, throttling, server unavailable)."""


class ConfigurationError(StorageError):
    """Storage configuration error."""
