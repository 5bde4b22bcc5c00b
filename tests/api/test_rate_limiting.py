from core.config import settings


def _upload(client):
    return client.post(
        "/api/documents/upload",
        files={"document": ("scan.pdf", b"%PDF", "application/pdf")},
    )


def test_twenty_first_document_request_is_rejected(client, fake_storage):
    for _ in range(20):
        assert _upload(client).status_code == 201

    resp = _upload(client)

    assert resp.status_code == 429
    assert resp.json() == {"error": "Upload limit reached, please try again later"}
    assert len(fake_storage.objects) == 20


def test_document_limit_is_shared_by_download(client):
    for _ in range(20):
        assert _upload(client).status_code == 201

    resp = client.get("/api/documents/download/general/12345678-1234-5678-1234-567812345678")

    assert resp.status_code == 429


def test_document_limit_is_per_client_ip(client):
    for _ in range(20):
        _upload(client)

    other = client.post(
        "/api/documents/upload",
        files={"document": ("scan.pdf", b"%PDF", "application/pdf")},
        headers={"X-Forwarded-For": "203.0.113.9"},
    )

    assert other.status_code == 201


def test_api_wide_limit(client):
    for _ in range(100):
        assert client.get("/").status_code == 200

    resp = client.get("/")

    assert resp.status_code == 429
    assert resp.json() == {"error": settings.rate_limit.api_limit_message}


def test_trusted_ip_skips_api_wide_limit(client, monkeypatch):
    monkeypatch.setattr(settings.rate_limit, "trusted_ips", ["198.51.100.1"])
    headers = {"X-Forwarded-For": "198.51.100.1"}

    for _ in range(101):
        assert client.get("/", headers=headers).status_code == 200
