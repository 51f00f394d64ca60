"""Derivation of the visible page from raw records and view parameters.

Pipeline: optional merge -> filter -> global sort -> paginate. Sorting always
runs over the whole filtered set before the page is sliced.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from leadgrid.app.table.comparator import sort_records
from leadgrid.app.table.merge import MergeInputs, project
from leadgrid.app.ui.filters import filter_records
from leadgrid.app.ui.listing_view import ViewParameters
from leadgrid.app.ui.pagination import PageMetadata, paginate


@dataclass(frozen=True)
class TableSpec:
    searchable_fields: tuple[str, ...]
    category_field: str | None = None


@dataclass(frozen=True)
class TableView:
    rows: list[dict[str, Any]]
    metadata: PageMetadata
    ordered: list[dict[str, Any]]


def derive_view(
    raw_records: Sequence[dict[str, Any]],
    params: ViewParameters,
    spec: TableSpec,
    merge_inputs: MergeInputs | None = None,
) -> TableView:
    records: Sequence[dict[str, Any]] = raw_records
    if merge_inputs is not None:
        records = project(raw_records, merge_inputs.secondary, merge_inputs.rule)

    filtered = filter_records(
        records,
        params.search_text,
        params.categorical_filter,
        spec.searchable_fields,
        spec.category_field,
    )
    ordered = sort_records(filtered, params.sort)
    page = paginate(ordered, params.page, params.page_size)
    return TableView(rows=page.items, metadata=page.metadata, ordered=ordered)


class DerivedViewCache:
    """Remembers the last derivation so repeated renders with the same inputs reuse it."""

    def __init__(self, spec: TableSpec) -> None:
        self.spec = spec
        self._key: tuple[Any, ...] | None = None
        self._sources: tuple[Any, ...] = ()
        self._view: TableView | None = None

    def get(
        self,
        raw_records: Sequence[dict[str, Any]],
        version: int,
        params: ViewParameters,
        merge_inputs: MergeInputs | None = None,
        merge_version: int = 0,
    ) -> TableView:
        key = (version, params, merge_version)
        # the inputs themselves are held and compared by identity, never by address
        if self._view is not None and key == self._key and _same_objects(self._sources, (raw_records, merge_inputs)):
            return self._view
        self._view = derive_view(raw_records, params, self.spec, merge_inputs)
        self._key = key
        self._sources = (raw_records, merge_inputs)
        return self._view

    def clear(self) -> None:
        self._key = None
        self._sources = ()
        self._view = None


def _same_objects(held: tuple[Any, ...], current: tuple[Any, ...]) -> bool:
    return len(held) == len(current) and all(left is right for left, right in zip(held, current))
