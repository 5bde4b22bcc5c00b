"""Storage key derivation for uploaded documents.

Keys look like ``{document_type}/{related_record_id}/{uuid}{ext}`` or
``{document_type}/{uuid}{ext}`` when no related record is given.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from os.path import splitext
from typing import Callable, Optional

from domain.common.exceptions import (
    InvalidDocumentKeyException,
    InvalidDocumentKeySegmentException,
)

DEFAULT_DOCUMENT_TYPE = "general"

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,16}$")
_OBJECT_NAME_RE = re.compile(
    r"^(?P<id>[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})"
    r"(?P<ext>\.[A-Za-z0-9]{1,16})?$"
)


@dataclass(frozen=True)
class DocumentKey:
    """Parsed representation of a document storage key."""

    document_type: str
    related_record_id: Optional[str]
    unique_id: str
    extension: str = ""

    def __str__(self) -> str:
        parts = [self.document_type]
        if self.related_record_id:
            parts.append(self.related_record_id)
        parts.append(f"{self.unique_id}{self.extension}")
        return "/".join(parts)


def _clean_segment(value: Optional[str], field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        return ""
    # '.' and '..' cannot match because the first char must be alphanumeric
    if not _SEGMENT_RE.match(cleaned):
        raise InvalidDocumentKeySegmentException(field, cleaned)
    return cleaned


def extract_extension(filename: Optional[str]) -> str:
    """Return the last suffix of ``filename`` (dot included), or ``""``.

    Suffixes with characters that are unsafe in a key are dropped.
    """
    _, ext = splitext(filename or "")
    if ext and _EXTENSION_RE.match(ext):
        return ext
    return ""


def build_document_key(
    document_type: Optional[str],
    related_record_id: Optional[str],
    original_name: Optional[str],
    id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
) -> str:
    """Build a fresh, globally unique storage key for an uploaded document.

    Args:
        document_type: Category such as ``passport`` or ``visa``;
            ``"general"`` when empty
        related_record_id: Optional id of the record the document belongs to
        original_name: Client-supplied filename, only its extension is used
        id_factory: Source of the random component

    Returns:
        Storage key

    Raises:
        InvalidDocumentKeySegmentException: If a path segment is unsafe

    Example:
        build_document_key("passport", "42", "scan.pdf")
        -> "passport/42/0b6c...e1.pdf"
    """
    doc_type = _clean_segment(document_type, "documentType") or DEFAULT_DOCUMENT_TYPE
    record_id = _clean_segment(related_record_id, "relatedRecordId")

    key = DocumentKey(
        document_type=doc_type,
        related_record_id=record_id or None,
        unique_id=str(id_factory()),
        extension=extract_extension(original_name),
    )
    return str(key)


def parse_document_key(key: str) -> DocumentKey:
    """Parse a key produced by :func:`build_document_key`.

    Raises:
        InvalidDocumentKeyException: If ``key`` does not have the expected shape
    """
    parts = (key or "").split("/")
    if len(parts) not in (2, 3):
        raise InvalidDocumentKeyException(key)

    match = _OBJECT_NAME_RE.match(parts[-1])
    if match is None:
        raise InvalidDocumentKeyException(key)

    prefixes = parts[:-1]
    if not all(_SEGMENT_RE.match(p) for p in prefixes):
        raise InvalidDocumentKeyException(key)

    return DocumentKey(
        document_type=prefixes[0],
        related_record_id=prefixes[1] if len(prefixes) == 2 else None,
        unique_id=match.group("id"),
        extension=match.group("ext") or "",
    )
