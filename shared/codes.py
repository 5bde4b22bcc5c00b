"""
Shared business codes used across layers (Domain/Core/API).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Business status codes (single source of truth)."""

    # Parameter errors (1xxxx)
    PARAM_MISSING = 10001
    PARAM_VALIDATION_ERROR = 10003
    FILE_TOO_LARGE = 10004
    UNSUPPORTED_MEDIA_TYPE = 10005

    # Business errors (2xxxx)
    DOCUMENT_NOT_FOUND = 20007

    # System errors (4xxxx)
    STORAGE_WRITE_FAILED = 40004
    STORAGE_READ_FAILED = 40005


__all__ = ["BusinessCode"]
