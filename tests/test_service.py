from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cguide.service.app import create_app
from cguide.store.document_store import load_store


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(load_store()))


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "documents": 2}


def test_list_documents(client: TestClient):
    resp = client.get("/documents")
    assert resp.status_code == 200
    assert resp.json() == [
        {"name": "security", "title": "C Security"},
        {"name": "style", "title": "C Style"},
    ]


def test_document_served_as_html_page(client: TestClient):
    resp = client.get("/documents/style")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert '<h1 id="c-style">C Style</h1>' in resp.text
    assert "<!DOCTYPE html>" in resp.text


def test_document_suffix_selects_text(client: TestClient):
    resp = client.get("/documents/style.txt")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text.startswith("C Style\n=======\n")


def test_document_format_query(client: TestClient):
    resp = client.get("/documents/security", params={"format": "markdown"})
    assert resp.status_code == 200
    assert resp.text.startswith("# C Security\n")


def test_unknown_document_is_404(client: TestClient):
    resp = client.get("/documents/nope")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Document not found: nope"}


def test_unsupported_format_is_rejected(client: TestClient):
    resp = client.get("/documents/style", params={"format": "pdf"})
    assert resp.status_code == 422
