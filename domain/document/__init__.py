"""Document domain exports."""
from .entity import DocumentObject
from .keys import (
    DEFAULT_DOCUMENT_TYPE,
    DocumentKey,
    build_document_key,
    extract_extension,
    parse_document_key,
)

__all__ = [
    "DocumentObject",
    "DocumentKey",
    "DEFAULT_DOCUMENT_TYPE",
    "build_document_key",
    "extract_extension",
    "parse_document_key",
]
