import re
import uuid

import pytest

from domain.common.exceptions import (
    DomainValidationException,
    InvalidDocumentKeyException,
    InvalidDocumentKeySegmentException,
)
from domain.document import (
    DEFAULT_DOCUMENT_TYPE,
    DocumentKey,
    DocumentObject,
    build_document_key,
    extract_extension,
    parse_document_key,
)

UUID_RE = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"


def test_key_with_related_record():
    key = build_document_key("passport", "42", "scan.pdf")
    assert re.fullmatch(rf"passport/42/{UUID_RE}\.pdf", key)


def test_key_without_related_record_has_two_segments():
    key = build_document_key("visa", None, "photo.JPG")
    assert re.fullmatch(rf"visa/{UUID_RE}\.JPG", key)


@pytest.mark.parametrize("doc_type", [None, "", "   "])
def test_missing_document_type_defaults_to_general(doc_type):
    key = build_document_key(doc_type, "7", "a.txt")
    assert key.startswith(f"{DEFAULT_DOCUMENT_TYPE}/7/")


def test_file_without_extension():
    key = build_document_key("proxy", "1", "README")
    assert re.fullmatch(rf"proxy/1/{UUID_RE}", key)


def test_only_last_suffix_is_kept():
    assert extract_extension("archive.tar.gz") == ".gz"
    assert extract_extension(".bashrc") == ""
    assert extract_extension(None) == ""


def test_unsafe_extension_is_dropped():
    assert extract_extension("evil.p/df") == ""
    assert extract_extension("x.pdf?raw=1") == ""


def test_id_factory_is_used():
    fixed = uuid.UUID("12345678-1234-5678-1234-567812345678")
    key = build_document_key("passport", "42", "scan.pdf", id_factory=lambda: fixed)
    assert key == f"passport/42/{fixed}.pdf"


def test_keys_are_unique():
    keys = {build_document_key("passport", "42", "scan.pdf") for _ in range(10_000)}
    assert len(keys) == 10_000


@pytest.mark.parametrize(
    "doc_type, record_id, field",
    [
        ("../etc", "1", "documentType"),
        ("passport", "a/b", "relatedRecordId"),
        ("passport", "..", "relatedRecordId"),
        ("pass port", None, "documentType"),
        ("x" * 65, None, "documentType"),
    ],
)
def test_unsafe_segments_are_rejected(doc_type, record_id, field):
    with pytest.raises(InvalidDocumentKeySegmentException) as exc_info:
        build_document_key(doc_type, record_id, "scan.pdf")
    assert exc_info.value.field == field
    assert exc_info.value.message == f"Invalid {field}."


def test_parse_three_segment_key():
    key = build_document_key("passport", "42", "scan.pdf")
    parsed = parse_document_key(key)
    assert parsed.document_type == "passport"
    assert parsed.related_record_id == "42"
    assert parsed.extension == ".pdf"
    assert str(parsed) == key


def test_parse_two_segment_key():
    key = build_document_key("general", None, "notes")
    parsed = parse_document_key(key)
    assert parsed == DocumentKey("general", None, key.split("/")[1])


@pytest.mark.parametrize(
    "key",
    [
        "",
        "passport",
        "passport/42/not-a-uuid.pdf",
        "../42/12345678-1234-5678-1234-567812345678.pdf",
        "a/b/c/12345678-1234-5678-1234-567812345678",
    ],
)
def test_parse_rejects_malformed_keys(key):
    with pytest.raises(InvalidDocumentKeyException):
        parse_document_key(key)


def test_document_object_validation():
    doc = DocumentObject(key="general/x", original_name="x", size=0, mime_type="text/plain")
    assert doc.size == 0
    with pytest.raises(DomainValidationException):
        DocumentObject(key="", original_name="x", size=1, mime_type="text/plain")
    with pytest.raises(DomainValidationException):
        DocumentObject(key="general/x", original_name="x", size=-1, mime_type="text/plain")
