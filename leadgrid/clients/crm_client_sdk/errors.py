from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

_STATUS_CODE_NAMES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        """Build an error from a 4xx/5xx answer.

        json-server replies with an empty object or plain text, so the code
        usually comes from the status; a JSON body with ``code``/``message``
        (or ``error``) overrides it.
        """
        body = _json_or_none(response)
        fields = body if isinstance(body, dict) else {}
        header_trace = response.headers.get("X-Trace-ID") or response.headers.get("X-Request-ID")
        return cls(
            code=str(fields.get("code") or status_code_name(response.status_code)),
            message=str(fields.get("message") or fields.get("error") or response.text or "HTTP request failed"),
            details=fields.get("details") if isinstance(body, dict) else body,
            trace_id=fields.get("trace_id") or header_trace,
            status_code=response.status_code,
        )


def status_code_name(status_code: int) -> str:
    if status_code >= 500:
        return "SERVER_ERROR"
    return _STATUS_CODE_NAMES.get(status_code, "HTTP_ERROR")


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
