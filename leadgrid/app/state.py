from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from leadgrid.app.table.comparator import SortDirective
from leadgrid.app.table.merge import MergeInputs, ProjectionRule
from leadgrid.app.table.view_engine import DerivedViewCache, TableSpec, TableView
from leadgrid.app.ui import listing_view
from leadgrid.app.ui.listing_view import FieldDescriptor, ViewParameters
from leadgrid.app.ui.pagination import goto_page, next_page, prev_page


@dataclass
class TableSession:
    """Owns one screen's raw record cache and its last-applied view parameters."""

    spec: TableSpec
    columns: list[FieldDescriptor] = field(default_factory=list)
    params: ViewParameters = field(default_factory=ViewParameters)
    records: list[dict[str, Any]] = field(default_factory=list)
    secondary_records: list[dict[str, Any]] = field(default_factory=list)
    projection_rule: ProjectionRule | None = None
    version: int = 0
    fetch_generation: int = 0

    def __post_init__(self) -> None:
        self.columns = listing_view.validate_columns(self.columns)
        self._cache = DerivedViewCache(self.spec)
        self._merge_inputs: MergeInputs | None = None

    def view(self) -> TableView:
        return self._cache.get(self.records, self.version, self.params, self.merge_inputs(), merge_version=self.version)

    def merge_inputs(self) -> MergeInputs | None:
        if self.projection_rule is None:
            return None
        if (
            self._merge_inputs is None
            or self._merge_inputs.secondary is not self.secondary_records
            or self._merge_inputs.rule is not self.projection_rule
        ):
            self._merge_inputs = MergeInputs(secondary=self.secondary_records, rule=self.projection_rule)
            self._cache.clear()
        return self._merge_inputs

    def replace_records(
        self,
        records: Sequence[dict[str, Any]],
        secondary: Sequence[dict[str, Any]] | None = None,
    ) -> None:
        self.records = [dict(record) for record in records]
        if secondary is not None:
            self.secondary_records = [dict(record) for record in secondary]
        self.version += 1
        self.fetch_generation += 1

    def find_record(self, record_id: Any, derived: bool = False) -> dict[str, Any] | None:
        """Look up a local record. Derived rows resolve to their source record in the secondary pool."""
        pool = self.secondary_records if derived else self.records
        return next((record for record in pool if same_id(record.get("id"), record_id)), None)

    def patch_record(self, record_id: Any, changes: dict[str, Any], derived: bool = False) -> bool:
        """Merge ``changes`` into one local record. The identity field is never overwritten."""
        pool = self.secondary_records if derived else self.records
        for index, record in enumerate(pool):
            if same_id(record.get("id"), record_id):
                updated = {**record, **{key: value for key, value in changes.items() if key != "id"}}
                pool[index] = updated
                self.version += 1
                return True
        return False

    def set_search(self, search_text: str) -> None:
        self.params = listing_view.with_search(self.params, search_text)

    def set_filter(self, categorical_filter: str | None) -> None:
        self.params = listing_view.with_filter(self.params, categorical_filter)

    def set_page_size(self, page_size: int) -> None:
        self.params = listing_view.with_page_size(self.params, page_size)

    def set_sort(self, sort: SortDirective | None) -> None:
        self.params = listing_view.with_sort(self.params, sort)

    def click_header(self, column_id: str) -> None:
        self.set_sort(listing_view.toggle_sort(self.columns, self.params.sort, column_id))

    def toggle_column(self, column_id: str, visible: bool) -> None:
        self.columns = listing_view.toggle_visibility(self.columns, column_id, visible)

    def goto_page(self, page: int) -> None:
        self.params = goto_page(self.params, page)

    def next_page(self) -> None:
        self.params = next_page(self.params, self.view().metadata)

    def prev_page(self) -> None:
        self.params = prev_page(self.params)


def same_id(left: Any, right: Any) -> bool:
    """Ids from the store are ints; ids typed into a form or CLI arrive as text."""
    if left is None or right is None:
        return left is right
    return str(left) == str(right)
