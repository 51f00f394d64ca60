from __future__ import annotations

import time
from collections.abc import Iterable, Sequence
from typing import Any, Callable

ALL_FILTER = "all"


def filter_records(
    records: Iterable[dict[str, Any]],
    search_text: str | None,
    categorical_filter: str | None,
    searchable_fields: Sequence[str],
    category_field: str | None,
) -> list[dict[str, Any]]:
    term = normalize_search(search_text)
    category = categorical_filter or ALL_FILTER

    filtered: list[dict[str, Any]] = []
    for record in records:
        if term and not matches_search(record, term, searchable_fields):
            continue
        if category != ALL_FILTER and (category_field is None or record.get(category_field) != category):
            continue
        filtered.append(record)
    return filtered


def matches_search(record: dict[str, Any], term: str, searchable_fields: Sequence[str]) -> bool:
    return any(term in _searchable_text(record.get(field)) for field in searchable_fields)


def normalize_search(search_text: str | None) -> str:
    return (search_text or "").strip().lower()


def _searchable_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


def debounce_text(term: str, wait_ms: int = 500, sleeper: Callable[[float], None] | None = None) -> str:
    if wait_ms <= 0:
        return term
    (sleeper or time.sleep)(wait_ms / 1000)
    return term
