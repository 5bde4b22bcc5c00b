import re

from application.ports.storage import StoragePortError

UUID_RE = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
UPLOAD_URL = "/api/documents/upload"


def upload(client, name="scan.pdf", data=b"%PDF-1.4", mimetype="application/pdf", **form):
    return client.post(UPLOAD_URL, files={"document": (name, data, mimetype)}, data=form)


def test_upload_returns_created_document(client, fake_storage):
    resp = upload(client, documentType="passport", relatedRecordId="42")

    assert resp.status_code == 201
    body = resp.json()
    assert set(body) == {"message", "key", "originalName", "size", "mimetype"}
    assert body["message"] == "File uploaded successfully"
    assert re.fullmatch(rf"passport/42/{UUID_RE}\.pdf", body["key"])
    assert body["originalName"] == "scan.pdf"
    assert body["size"] == 8
    assert body["mimetype"] == "application/pdf"
    assert fake_storage.objects[body["key"]]["data"] == b"%PDF-1.4"


def test_upload_defaults_to_general(client):
    resp = upload(client, name="notes.txt", data=b"hi", mimetype="text/plain")

    assert resp.status_code == 201
    assert re.fullmatch(rf"general/{UUID_RE}\.txt", resp.json()["key"])


def test_upload_without_file(client, fake_storage):
    resp = client.post(UPLOAD_URL, data={"documentType": "passport"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded."}
    assert fake_storage.calls == []


def test_upload_with_unsafe_segment(client, fake_storage):
    resp = upload(client, documentType="passport", relatedRecordId="../../admin")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid relatedRecordId."
    assert fake_storage.calls == []


def test_upload_storage_failure(client, fake_storage):
    fake_storage.upload_error = StoragePortError("bucket documents unreachable")

    resp = upload(client)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to upload file."}


def test_download_url_for_uploaded_document(client):
    key = upload(client, documentType="visa", relatedRecordId="7").json()["key"]

    resp = client.get(f"/api/documents/download/{key}")

    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"downloadUrl", "expiresIn"}
    assert key in body["downloadUrl"]
    assert body["expiresIn"] == 900


def test_download_url_for_two_segment_key(client):
    key = upload(client).json()["key"]
    assert key.count("/") == 1

    resp = client.get(f"/api/documents/download/{key}")

    assert resp.status_code == 200


def test_download_url_missing_document(client):
    resp = client.get(f"/api/documents/download/passport/42/12345678-1234-5678-1234-567812345678.pdf")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Document not found."}


def test_download_url_storage_failure(client, fake_storage):
    fake_storage.exists_error = StoragePortError("timeout")

    resp = client.get("/api/documents/download/general/12345678-1234-5678-1234-567812345678")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to get download link."}


def test_download_url_malformed_key(client, fake_storage):
    resp = client.get("/api/documents/download/passport/not-a-key")

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid document key."
    assert fake_storage.calls == []


def test_unknown_route(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found: GET /api/nope"}


def test_health_and_root(client):
    health = client.get("/api/health")
    root = client.get("/")

    assert health.status_code == 200
    assert health.json() == {"status": "ok"}
    assert root.json()["name"]


def test_request_id_and_timing_headers(client):
    generated = client.get("/api/health")
    echoed = client.get("/", headers={"X-Request-ID": "trace-123"})
    rejected = client.get("/", headers={"X-Request-ID": "bad id with spaces"})

    assert re.fullmatch(UUID_RE, generated.headers["X-Request-ID"])
    assert "X-Process-Time" in generated.headers
    assert echoed.headers["X-Request-ID"] == "trace-123"
    assert rejected.headers["X-Request-ID"] != "bad id with spaces"


def test_error_responses_carry_request_id(client):
    resp = client.get("/api/nope", headers={"X-Request-ID": "trace-404"})

    assert resp.headers["X-Request-ID"] == "trace-404"
    assert "X-Process-Time" in resp.headers
