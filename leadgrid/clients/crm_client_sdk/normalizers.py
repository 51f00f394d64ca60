from __future__ import annotations

from typing import Any


def normalize_rows(payload: Any) -> list[dict[str, Any]]:
    """Extract the record list from a collection response.

    The store answers collection reads with a bare JSON array, which the HTTP
    client wraps as ``{"data": [...]}``. Envelopes using ``rows`` or ``items``
    are accepted as well. Non-mapping entries are dropped.
    """
    rows: Any = []
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in ("data", "rows", "items"):
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break
    return [dict(row) for row in rows if isinstance(row, dict)]


def build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}


def normalize_search_term(search: str | None) -> str | None:
    term = (search or "").strip()
    return term or None
