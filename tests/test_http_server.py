"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from pos_server import http_server
from pos_server.config import Settings
from pos_server.terminal import build_terminal

from conftest import BASE_URL, COFFEE, TEA, UNKNOWN_CODE


@pytest.fixture
def api(backend, monkeypatch):
    monkeypatch.setattr(http_server, "load_settings", lambda: Settings(api_url=BASE_URL))
    monkeypatch.setattr(
        http_server, "build_terminal", lambda settings: build_terminal(settings, transport=backend.transport)
    )
    with TestClient(http_server.app) as client:
        yield client


def test_health(api):
    response = api.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "backend": BASE_URL}


def test_lookup_add_and_purchase(api, backend):
    session = api.post("/lookup", json={"code": TEA["CODE"]}).json()
    assert session["staged"] == {"id": 1, "name": "Tea", "code": TEA["CODE"], "price": 150}
    assert session["can_add"] is True

    session = api.post("/cart/add").json()
    assert session["cart_total"] == 150
    assert session["code_input"] == ""

    cart = api.get("/cart").json()
    assert cart["count"] == 1
    assert cart["items"][0]["name"] == "Tea"

    session = api.post("/purchase").json()
    assert session["cart"] == []
    assert session["receipt"]["total"] == 150
    assert len(backend.transactions) == 1


def test_lookup_uses_code_field(api):
    api.post("/code", json={"code": COFFEE["CODE"]})

    session = api.post("/lookup", json={}).json()

    assert session["staged"]["name"] == "Coffee"


def test_lookup_not_found_reported_in_session(api):
    response = api.post("/lookup", json={"code": UNKNOWN_CODE})

    assert response.status_code == 200
    assert response.json()["status"] == "error"
    assert response.json()["error_message"] == "商品がマスタ未登録です"


def test_add_without_staged_product(api):
    response = api.post("/cart/add")

    assert response.status_code == 409


def test_remove_from_cart(api):
    for code in (TEA["CODE"], COFFEE["CODE"]):
        api.post("/lookup", json={"code": code})
        api.post("/cart/add")
    first, second = api.get("/cart").json()["items"]

    session = api.post("/cart/remove", json={"line_id": first["line_id"]}).json()
    assert [item["line_id"] for item in session["cart"]] == [second["line_id"]]

    session = api.post("/cart/remove", json={"position": 1}).json()
    assert session["cart"] == []


@pytest.mark.parametrize(
    "body, status",
    [({"line_id": "missing"}, 404), ({"position": 3}, 404), ({}, 400)],
)
def test_remove_from_cart_errors(api, body, status):
    response = api.post("/cart/remove", json=body)

    assert response.status_code == status


def test_purchase_with_empty_cart(api, backend):
    session = api.post("/purchase").json()

    assert session["status"] == "empty_cart_warning"
    assert backend.requests == []


def test_language_settings(api):
    assert api.get("/settings/language").json() == {"language": "ja"}

    assert api.post("/settings/language", json={"language": "en"}).status_code == 200
    assert api.get("/settings/language").json() == {"language": "en"}

    assert api.post("/settings/language", json={"language": "fr"}).status_code == 400
