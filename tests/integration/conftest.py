from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.clients.crm_client_sdk.config import SDKConfig
from leadgrid.clients.crm_client_sdk.http_client import HttpClient

SEED_LEADS = [
    {"id": 1, "name": "Ana Torres", "company": "Acme", "email": "ana@acme.io", "source": "Web", "score": 72, "status": "New"},
    {"id": 2, "name": "Bruno Lima", "company": "Globex", "email": "bruno@globex.io", "source": "Referral", "score": 88, "status": "Qualified"},
    {"id": 3, "name": "Carla Diaz", "company": "Initech", "email": "carla@initech.io", "source": "Event", "score": 41, "status": "Converted"},
    {"id": 4, "name": "Dario Ruiz", "company": "Acme", "email": "dario@acme.io", "source": "Web", "score": 15, "status": "Contacted"},
]

SEED_OPPORTUNITIES = [
    {"id": 10, "name": "Acme renewal", "stage": "Proposal", "amount": 1200.0, "accountName": "Acme"},
    {"id": 11, "name": "Globex pilot", "stage": "Prospecting", "accountName": "Globex"},
]


class FakeCrmStore:
    """In-memory stand-in for the json-server style CRM store."""

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            "leads": [dict(row) for row in SEED_LEADS],
            "opportunities": [dict(row) for row in SEED_OPPORTUNITIES],
        }
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], int] = {}

    def fail(self, method: str, path: str, status_code: int = 500) -> None:
        self.failures[(method, path)] = status_code

    def record(self, collection: str, record_id: Any) -> dict[str, Any] | None:
        return next((row for row in self.collections[collection] if row["id"] == record_id), None)

    def calls(self, method: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        status_code = self.failures.get((request.method, path))
        if status_code is not None:
            return httpx.Response(status_code, json={"message": "store unavailable"}, headers={"X-Trace-ID": "trace-fake"})

        parts = [part for part in path.split("/") if part]
        rows = self.collections.get(parts[0]) if parts else None
        if rows is None:
            return httpx.Response(404, json={})

        if len(parts) == 1 and request.method == "GET":
            return httpx.Response(200, json=self._query(rows, request.url.params))
        if len(parts) == 1 and request.method == "POST":
            body = json.loads(request.content)
            rows.append(body)
            return httpx.Response(201, json=body)

        record_id = int(parts[1])
        current = next((row for row in rows if row["id"] == record_id), None)
        if current is None:
            return httpx.Response(404, json={})
        if request.method == "PATCH":
            current.update(json.loads(request.content))
            return httpx.Response(200, json=current)
        if request.method == "DELETE":
            rows.remove(current)
            return httpx.Response(200, json={})
        return httpx.Response(405, json={})

    @staticmethod
    def _query(rows: list[dict[str, Any]], params: httpx.QueryParams) -> list[dict[str, Any]]:
        result = [dict(row) for row in rows]
        term = params.get("q")
        if term:
            result = [row for row in result if any(term.lower() in str(value).lower() for value in row.values())]
        if params.get("status"):
            result = [row for row in result if row.get("status") == params["status"]]
        sort_key = params.get("_sort")
        if sort_key:
            result.sort(key=lambda row: row.get(sort_key) or 0, reverse=params.get("_order") == "desc")
        return result


def make_http(handler, retry_max_attempts: int = 1) -> HttpClient:
    config = SDKConfig(
        base_url="http://crm.test/",
        timeout_seconds=5,
        verify_ssl=True,
        retry_max_attempts=retry_max_attempts,
        retry_backoff_ms=0,
    )
    client = httpx.Client(base_url=config.base_url, transport=httpx.MockTransport(handler))
    return HttpClient(config=config, client=client)


@pytest.fixture
def crm_store() -> FakeCrmStore:
    return FakeCrmStore()


@pytest.fixture
def crm_http(crm_store: FakeCrmStore) -> Iterator[HttpClient]:
    http = make_http(crm_store.handler)
    yield http
    http.close()


@pytest.fixture
def crm_adapter(crm_http: HttpClient) -> CrmAdapter:
    return CrmAdapter(crm_http)


@pytest.fixture
def http_factory():
    return make_http
