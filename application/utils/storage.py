"""Application-level storage helpers to avoid infra coupling."""
from __future__ import annotations

from typing import Optional
import mimetypes
import unicodedata

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(filename: Optional[str]) -> str:
    ctype, _ = mimetypes.guess_type(filename or "")
    return ctype or DEFAULT_CONTENT_TYPE


def ascii_metadata_value(value: str, max_len: int = 256) -> str:
    """S3 user metadata travels in HTTP headers, which must be ASCII."""
    normalized = unicodedata.normalize("NFKD", value or "")
    cleaned = normalized.encode("ascii", "ignore").decode("ascii")
    cleaned = "".join(ch for ch in cleaned if ch.isprintable())
    return cleaned[:max_len]
