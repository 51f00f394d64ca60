from __future__ import annotations

import locale
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    def reversed(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True)
class SortDirective:
    property: str
    direction: SortDirection = SortDirection.ASC

    def toggle(self, property: str) -> "SortDirective":
        """Header click: flip the direction of the active column, start a new column ascending."""
        if property == self.property:
            return SortDirective(property=property, direction=self.direction.reversed())
        return SortDirective(property=property, direction=SortDirection.ASC)


def compare_values(a: Any, b: Any, direction: SortDirection) -> int:
    ascending = direction is SortDirection.ASC

    if a is None and b is None:
        return 0
    # nulls sit at the start when ascending and at the end when descending
    if a is None:
        return -1 if ascending else 1
    if b is None:
        return 1 if ascending else -1

    if isinstance(a, str) and isinstance(b, str):
        result = _compare_text(a, b)
    elif _is_number(a) and _is_number(b):
        result = _sign(a - b)
    else:
        return 0
    return result if ascending else -result


def sort_records(records: Iterable[dict[str, Any]], sort: SortDirective | None) -> list[dict[str, Any]]:
    rows = list(records)
    if sort is None or not sort.property:
        return rows

    def _compare(left: dict[str, Any], right: dict[str, Any]) -> int:
        return compare_values(left.get(sort.property), right.get(sort.property), sort.direction)

    return sorted(rows, key=cmp_to_key(_compare))


def _compare_text(a: str, b: str) -> int:
    # base letters first, then accents, then case
    for left, right in ((_collation_key(a), _collation_key(b)), (a.casefold(), b.casefold())):
        result = _sign_of(locale.strxfrm(left), locale.strxfrm(right))
        if result:
            return result
    return _sign_of(a, b)


def _collation_key(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _sign_of(left: str, right: str) -> int:
    if left == right:
        return 0
    return 1 if left > right else -1
