from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class TableError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class FetchFailure(TableError):
    """Remote read failed. No local state was changed."""


class MutationFailure(TableError):
    """Create, update or delete was rejected or never reached the store."""


class ValidationFailure(TableError):
    """Caller-supplied values failed schema constraints before any remote call."""

    @property
    def field_errors(self) -> dict[str, str]:
        return dict(self.details) if isinstance(self.details, dict) else {}
