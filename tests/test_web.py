"""Tests for the web page."""

from fastapi.testclient import TestClient

from schemadict.web import create_app


def test_index_page():
    """GET / should return the static page."""
    client = TestClient(create_app())

    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<h1>schemadict</h1>" in response.text


def test_missing_template():
    """An unreadable template should give a 500 with the error."""
    client = TestClient(create_app(template="missing.html"))

    response = client.get("/")

    assert response.status_code == 500
    assert response.text.startswith("Template error:")


def test_only_root_route():
    client = TestClient(create_app())

    assert client.get("/tables").status_code == 404
