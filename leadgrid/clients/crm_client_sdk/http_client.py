from __future__ import annotations

import time
from typing import Any

import httpx

from leadgrid.clients.crm_client_sdk.config import SDKConfig
from leadgrid.clients.crm_client_sdk.errors import ApiError

# only reads are replayed; a repeated POST would create a second record
RETRYABLE_METHODS = frozenset({"GET"})


class HttpClient:
    """Thin JSON client over httpx for the json-server style CRM store."""

    def __init__(self, config: SDKConfig | None = None, client: httpx.Client | None = None) -> None:
        self.config = config or SDKConfig()
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )

    def request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        method = method.upper()
        url = path if path.startswith("/") else f"/{path}"
        attempts = self.config.retry_max_attempts if method in RETRYABLE_METHODS else 1

        attempt = 1
        while True:
            try:
                return self._send(method, url, json_body, params)
            except ApiError as error:
                if attempt >= attempts or not _is_transient(error):
                    raise
            time.sleep(self.config.retry_backoff_ms * attempt / 1000)
            attempt += 1

    def close(self) -> None:
        self._client.close()

    def _send(
        self,
        method: str,
        url: str,
        json_body: dict[str, Any] | None,
        params: dict[str, Any] | None,
    ) -> dict[str, Any]:
        try:
            response = self._client.request(method, url, json=json_body, params=params)
        except httpx.TransportError as exc:
            raise ApiError(
                code="NETWORK_ERROR",
                message="Network error while calling the CRM store",
                details=str(exc),
            ) from exc
        if response.is_error:
            raise ApiError.from_http_response(response)
        return _decode(response)


def _decode(response: httpx.Response) -> dict[str, Any]:
    # json-server answers collection reads with a bare array and deletes with {}
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {"data": payload}


def _is_transient(error: ApiError) -> bool:
    if error.code == "NETWORK_ERROR":
        return True
    return error.status_code is not None and 500 <= error.status_code <= 599
