from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Any, TextIO

from leadgrid.app.ui.listing_view import FieldDescriptor, visible_columns
from leadgrid.app.ui.pagination import PageMetadata

EMPTY_VALUE = "—"
DERIVED_MARKER = "*"


def format_cell(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, str):
        return value.strip() or EMPTY_VALUE
    return str(value)


def print_table(
    title: str,
    rows: Sequence[dict[str, Any]],
    columns: Sequence[FieldDescriptor],
    metadata: PageMetadata | None = None,
    stream: TextIO | None = None,
) -> None:
    out = stream or sys.stdout
    shown = [column for column in visible_columns(columns) if column.id != "actions"]
    out.write(f"\n{title}\n")
    if not rows:
        out.write("(no results)\n")
    else:
        widths = []
        for column in shown:
            max_cell = max(len(_cell(row, column.id)) for row in rows)
            widths.append(max(len(column.label), max_cell))

        out.write(" | ".join(column.label.ljust(widths[idx]) for idx, column in enumerate(shown)) + "\n")
        out.write("-+-".join("-" * width for width in widths) + "\n")
        for row in rows:
            out.write(" | ".join(_cell(row, column.id).ljust(widths[idx]) for idx, column in enumerate(shown)) + "\n")

    if metadata is not None:
        out.write(f"{metadata.summary()}  (page {metadata.current_page}/{max(metadata.total_pages, 1)})\n")


def _cell(row: dict[str, Any], key: str) -> str:
    text = format_cell(row.get(key))
    if key == "id" and row.get("is_derived"):
        return f"{text}{DERIVED_MARKER}"
    return text
