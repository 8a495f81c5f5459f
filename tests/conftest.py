"""Shared pytest fixtures: a fake POS backend behind httpx.MockTransport."""

import json
from typing import Optional

import httpx
import pytest

from pos_server.pos_client import PosApiClient
from pos_server.terminal import PosTerminal

BASE_URL = "http://pos-backend.test"

TEA = {"PRD_ID": 1, "NAME": "Tea", "CODE": "4901234567894", "PRICE": 150}
COFFEE = {"PRD_ID": 2, "NAME": "Coffee", "CODE": "4901234567900", "PRICE": 120}
UNKNOWN_CODE = "0000000000000"


class FakeBackend:
    """In-memory POS backend speaking the backend's wire format."""

    def __init__(self) -> None:
        self.products = {TEA["CODE"]: TEA, COFFEE["CODE"]: COFFEE}
        self.requests: list[httpx.Request] = []
        self.transactions: list[dict] = []
        self.offline = False
        # Forced answers for the next lookups / transactions
        self.lookup_status: Optional[int] = None
        self.lookup_body: object = None
        self.transaction_status = 200
        self.transaction_body: object = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        path = request.url.path
        if request.method == "GET" and path.startswith("/products/"):
            return self._lookup(path[len("/products/"):])
        if request.method == "POST" and path == "/transactions":
            return self._transaction(json.loads(request.content))
        return httpx.Response(405, json={"detail": "Method Not Allowed"})

    def _lookup(self, code: str) -> httpx.Response:
        if self.lookup_status is not None:
            return httpx.Response(self.lookup_status, json=self.lookup_body)
        if code not in self.products:
            return httpx.Response(404, json={"detail": "Product not found"})
        return httpx.Response(200, json=self.products[code])

    def _transaction(self, body: dict) -> httpx.Response:
        if self.transaction_status >= 300:
            return httpx.Response(self.transaction_status, json={"detail": "could not save transaction"})
        self.transactions.append(body)
        if self.transaction_body is not None:
            return httpx.Response(self.transaction_status, json=self.transaction_body)
        return httpx.Response(200, json={"TOTAL_AMT": sum(item["PRICE"] for item in body["items"])})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    api = PosApiClient(BASE_URL, transport=backend.transport)
    yield api
    api.close()


@pytest.fixture
def terminal(client):
    return PosTerminal(client)
