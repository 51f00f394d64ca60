from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from leadgrid.app.ui.listing_view import ViewParameters, with_page


@dataclass(frozen=True)
class PageMetadata:
    total_items: int
    items_per_page: int
    total_pages: int
    current_page: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def first_item_index(self) -> int:
        if self.total_items == 0:
            return 0
        return (self.current_page - 1) * self.items_per_page + 1

    @property
    def last_item_index(self) -> int:
        return min(self.current_page * self.items_per_page, self.total_items)

    @property
    def show_ellipsis(self) -> bool:
        return self.current_page < self.total_pages - 2

    def visible_pages(self) -> list[int]:
        pages = range(1, self.total_pages + 1)
        return list(pages[max(0, self.current_page - 2) : self.current_page + 2])

    def summary(self) -> str:
        return f"Showing {self.first_item_index} to {self.last_item_index} of {self.total_items} entries"


@dataclass(frozen=True)
class Page:
    items: list[dict[str, Any]] = field(default_factory=list)
    metadata: PageMetadata = field(default_factory=lambda: build_metadata(0, 1, 1))


def build_metadata(total_items: int, page: int, page_size: int) -> PageMetadata:
    return PageMetadata(
        total_items=total_items,
        items_per_page=page_size,
        total_pages=math.ceil(total_items / page_size),
        current_page=page,
    )


def paginate(ordered: Sequence[dict[str, Any]], page: int, page_size: int) -> Page:
    start_index = (page - 1) * page_size
    end_index = start_index + page_size
    return Page(items=list(ordered[start_index:end_index]), metadata=build_metadata(len(ordered), page, page_size))


def next_page(params: ViewParameters, metadata: PageMetadata) -> ViewParameters:
    if not metadata.has_next:
        return params
    return with_page(params, params.page + 1)


def prev_page(params: ViewParameters) -> ViewParameters:
    return with_page(params, params.page - 1)


def goto_page(params: ViewParameters, page: int) -> ViewParameters:
    return with_page(params, page)
