"""HTTP API tests using FastAPI's TestClient."""

from fastapi.testclient import TestClient

from url_extract.web import app

client = TestClient(app)


def test_root_and_health():
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json() == {"health": "ok"}


def test_extract_text():
    response = client.post("/api/extract", json={"text": "www.b.org then http://a.com/x?y=1 and www.b.org"})

    assert response.status_code == 200
    assert response.json() == {"urls": ["http://a.com/x?y=1", "www.b.org"], "count": 2}


def test_extract_text_strip_arguments():
    response = client.post(
        "/api/extract",
        json={"text": "visit https://a.b.com/x?y=1&z=2", "strip_arguments": True},
    )

    assert response.json()["urls"] == ["https://a.b.com/x"]


def test_extract_text_uses_configured_default(monkeypatch):
    monkeypatch.setenv("URL_EXTRACT_STRIP_ARGUMENTS", "true")

    response = client.post("/api/extract", json={"text": "http://a.com/?q=1"})

    assert response.json()["urls"] == ["http://a.com/"]


def test_extract_text_missing_text():
    response = client.post("/api/extract", json={"strip_arguments": True})
    assert response.status_code == 400


def test_extract_text_guard_returns_413(monkeypatch):
    monkeypatch.setenv("URL_EXTRACT_MAX_TEXT_LENGTH", "5")

    response = client.post("/api/extract", json={"text": "http://a.com"})

    assert response.status_code == 413
    assert "Extraction aborted" in response.json()["detail"]


def test_extract_file_html():
    html = b'<p><a href="http://c.org/p?q=2">c</a> and www.d.net</p>'

    response = client.post(
        "/api/extract-file",
        files={"file": ("page.html", html, "text/html")},
        data={"strip_arguments": "true"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "filename": "page.html",
        "source_type": "html",
        "urls": ["http://c.org/p", "www.d.net"],
        "count": 2,
    }


def test_extract_file_unsupported_type():
    response = client.post(
        "/api/extract-file",
        files={"file": ("data.bin", b"\x00\x01", "application/octet-stream")},
    )
    assert response.status_code == 400


def test_extract_file_empty_upload():
    response = client.post(
        "/api/extract-file",
        files={"file": ("empty.txt", b"", "text/plain")},
    )
    assert response.status_code == 400


def test_extract_text_rejects_non_boolean_flag():
    """A string "false" is not silently treated as true."""
    response = client.post(
        "/api/extract",
        json={"text": "http://a.com/x?y=1", "strip_arguments": "false"},
    )
    assert response.status_code == 400


def test_extract_text_explicit_false_beats_configured_default(monkeypatch):
    monkeypatch.setenv("URL_EXTRACT_STRIP_ARGUMENTS", "true")

    response = client.post("/api/extract", json={"text": "http://a.com/x?y=1", "strip_arguments": False})

    assert response.json()["urls"] == ["http://a.com/x?y=1"]


def test_extract_file_guard_returns_413(monkeypatch):
    monkeypatch.setenv("URL_EXTRACT_MAX_TEXT_LENGTH", "5")

    response = client.post(
        "/api/extract-file",
        files={"file": ("notes.txt", b"see http://a.com", "text/plain")},
    )

    assert response.status_code == 413
    assert "Extraction aborted" in response.json()["detail"]


def test_extract_file_uses_configured_default(monkeypatch):
    monkeypatch.setenv("URL_EXTRACT_STRIP_ARGUMENTS", "true")

    response = client.post(
        "/api/extract-file",
        files={"file": ("notes.txt", b"see http://a.com/x?y=1", "text/plain")},
    )

    assert response.status_code == 200
    assert response.json()["urls"] == ["http://a.com/x"]


def test_extract_file_route_runs_in_threadpool():
    """The upload route is synchronous so FastAPI runs it off the event loop."""
    import inspect
    from url_extract.web import extract_file

    assert not inspect.iscoroutinefunction(extract_file)
