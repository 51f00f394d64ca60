from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from leadgrid.app.domain.errors import ValidationFailure
from leadgrid.app.table.comparator import SortDirection, SortDirective
from leadgrid.app.ui.filters import ALL_FILTER

DEFAULT_PAGE_SIZE = 20
PAGE_SIZE_OPTIONS = (5, 10, 25, 50, 100)


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    label: str
    visible: bool = True
    sortable: bool = True


@dataclass(frozen=True)
class ViewParameters:
    search_text: str = ""
    categorical_filter: str = ALL_FILTER
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort: SortDirective | None = field(default=None)

    def __post_init__(self) -> None:
        if not isinstance(self.page, int) or self.page < 1:
            raise ValidationFailure(code="VALIDATION_ERROR", message="page must be >= 1", details={"page": str(self.page)})
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise ValidationFailure(
                code="VALIDATION_ERROR",
                message="page_size must be >= 1",
                details={"page_size": str(self.page_size)},
            )


def with_search(params: ViewParameters, search_text: str) -> ViewParameters:
    if search_text == params.search_text:
        return params
    return replace(params, search_text=search_text, page=1)


def with_filter(params: ViewParameters, categorical_filter: str | None) -> ViewParameters:
    value = categorical_filter or ALL_FILTER
    if value == params.categorical_filter:
        return params
    return replace(params, categorical_filter=value, page=1)


def with_page_size(params: ViewParameters, page_size: int) -> ViewParameters:
    if page_size == params.page_size:
        return params
    return replace(params, page_size=page_size, page=1)


def with_sort(params: ViewParameters, sort: SortDirective | None) -> ViewParameters:
    return replace(params, sort=sort)


def with_page(params: ViewParameters, page: int) -> ViewParameters:
    return replace(params, page=max(1, page))


def validate_columns(columns: Sequence[FieldDescriptor]) -> list[FieldDescriptor]:
    seen: set[str] = set()
    for column in columns:
        if column.id in seen:
            raise ValueError(f"Duplicate column id: {column.id}")
        seen.add(column.id)
    return list(columns)


def toggle_visibility(columns: Sequence[FieldDescriptor], column_id: str, visible: bool) -> list[FieldDescriptor]:
    return [replace(column, visible=visible) if column.id == column_id else column for column in columns]


def visible_columns(columns: Sequence[FieldDescriptor]) -> list[FieldDescriptor]:
    return [column for column in columns if column.visible]


def toggle_sort(
    columns: Sequence[FieldDescriptor],
    current: SortDirective | None,
    column_id: str,
) -> SortDirective | None:
    """Apply a header click. Non-sortable or unknown columns leave the sort as it is."""
    column = next((item for item in columns if item.id == column_id), None)
    if column is None or not column.sortable:
        return current
    if current is None:
        return SortDirective(property=column_id, direction=SortDirection.ASC)
    return current.toggle(column_id)


def hydrate_column_state(
    payload: dict[str, Any] | None,
    columns: Sequence[FieldDescriptor],
    default_sort: SortDirective | None = None,
) -> tuple[list[FieldDescriptor], SortDirective | None]:
    defaults = list(columns)
    if not isinstance(payload, dict):
        return defaults, default_sort

    allowed = {column.id for column in columns}
    selected = payload.get("visible_columns")
    if isinstance(selected, list):
        chosen = {str(key) for key in selected if str(key) in allowed}
        hydrated = [replace(column, visible=column.id in chosen) for column in columns] if chosen else defaults
    else:
        hydrated = defaults

    sort_by = payload.get("sort_by")
    sortable = {column.id for column in columns if column.sortable}
    if sort_by in sortable:
        direction = SortDirection.DESC if str(payload.get("sort_dir", "asc")).upper() == "DESC" else SortDirection.ASC
        sort: SortDirective | None = SortDirective(property=str(sort_by), direction=direction)
    else:
        sort = default_sort
    return hydrated, sort


def serialize_column_state(columns: Sequence[FieldDescriptor], sort: SortDirective | None) -> dict[str, Any]:
    return {
        "visible_columns": [column.id for column in columns if column.visible],
        "sort_by": sort.property if sort else None,
        "sort_dir": sort.direction.value.lower() if sort else "asc",
    }
