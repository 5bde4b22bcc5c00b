"""Domain entity describing one document stored in object storage."""
from __future__ import annotations

from dataclasses import dataclass

from domain.common.exceptions import DomainValidationException


@dataclass(frozen=True)
class DocumentObject:
    """A stored document.

    The object store owns the bytes; the application only keeps ``key`` as a
    reference. Instances are immutable because keys never change once written.
    """

    key: str
    original_name: str
    size: int
    mime_type: str

    def __post_init__(self) -> None:
        if not self.key:
            raise DomainValidationException("Document key must not be empty", field="key")
        if self.size < 0:
            raise DomainValidationException(
                "Document size must not be negative",
                field="size",
                details={"size": self.size},
            )
