"""Optimistic single-cell edits.

Each cell (record + field) moves through IDLE -> EDITING -> COMMITTING -> IDLE.
The proposed value is written into the local record set as soon as the edit is
submitted. A successful remote update overlays the store's answer on that one
record; a failed one reloads the whole collection instead of trying to undo
the local change piecemeal.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable

from leadgrid.app.domain.errors import MutationFailure, TableError, ValidationFailure
from leadgrid.app.infrastructure.logging.logger import get_logger, log_action
from leadgrid.app.state import TableSession

Writer = Callable[[Any, dict[str, Any]], dict[str, Any] | None]
Refetch = Callable[[], None]
FieldValidator = Callable[[dict[str, Any], str, Any], Any]
CellKey = tuple[bool, Any, str]

ACCEPT_KEYS = {"Enter"}
CANCEL_KEYS = {"Escape"}

logger = get_logger(__name__)

_UNSET: Any = object()


class EditState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    COMMITTING = "committing"


@dataclass(frozen=True)
class EditIntent:
    record_id: Any
    field: str
    proposed_value: Any
    derived: bool = False
    original_value: Any = None
    fetch_generation: int = field(default=0, compare=False)

    @property
    def cell(self) -> CellKey:
        return (self.derived, self.record_id, self.field)


class OptimisticEditCoordinator:
    def __init__(
        self,
        session: TableSession,
        writer: Writer,
        refetch: Refetch,
        *,
        derived_writer: Writer | None = None,
        validator: FieldValidator | None = None,
        module: str = "table",
    ) -> None:
        self.session = session
        self.writer = writer
        self.refetch = refetch
        self.derived_writer = derived_writer
        self.validator = validator
        self.module = module
        self.editing: EditIntent | None = None
        self.committing: dict[CellKey, EditIntent] = {}

    def state(self, record_id: Any, field: str, derived: bool = False) -> EditState:
        cell = (derived, record_id, field)
        if cell in self.committing:
            return EditState.COMMITTING
        if self.editing is not None and self.editing.cell == cell:
            return EditState.EDITING
        return EditState.IDLE

    def start_edit(self, record_id: Any, field: str, derived: bool = False) -> EditIntent:
        if field == "id":
            raise ValidationFailure(code="VALIDATION_ERROR", message="The id field cannot be edited", details={"id": "read-only"})
        if derived and self.derived_writer is None:
            raise ValidationFailure(
                code="VALIDATION_ERROR",
                message="Derived rows are read-only in this table",
                details={field: "read-only"},
            )
        if (derived, record_id, field) in self.committing:
            raise MutationFailure(code="EDIT_IN_FLIGHT", message=f"{field} of record {record_id} is still being saved")

        record = self.session.find_record(record_id, derived=derived)
        if record is None:
            raise ValidationFailure(code="RECORD_NOT_FOUND", message=f"Record {record_id} is not loaded", details={"id": str(record_id)})

        if self.editing is not None:
            self.cancel()

        current = record.get(field)
        self.editing = EditIntent(
            record_id=record_id,
            field=field,
            proposed_value=current,
            derived=derived,
            original_value=current,
        )
        return self.editing

    def update_value(self, value: Any) -> EditIntent:
        intent = self._require_editing()
        self.editing = replace(intent, proposed_value=value)
        return self.editing

    def cancel(self) -> None:
        if self.editing is None:
            return
        log_action(logger, self.module, "edit.cancel", self.editing.record_id, "cancelled", field=self.editing.field)
        self.editing = None

    def submit(self, value: Any = _UNSET) -> EditIntent:
        """EDITING -> COMMITTING. Validates, then applies the proposed value locally."""
        intent = self._require_editing()
        if value is not _UNSET:
            intent = replace(intent, proposed_value=value)
            self.editing = intent

        if self.validator is not None:
            record = self.session.find_record(intent.record_id, derived=intent.derived) or {}
            intent = replace(intent, proposed_value=self.validator(record, intent.field, intent.proposed_value))

        intent = replace(intent, fetch_generation=self.session.fetch_generation)
        self.editing = None
        self.committing[intent.cell] = intent
        self.session.patch_record(intent.record_id, {intent.field: intent.proposed_value}, derived=intent.derived)
        return intent

    def resolve_success(self, intent: EditIntent, returned: dict[str, Any] | None) -> dict[str, Any] | None:
        """COMMITTING -> IDLE after the store accepted the update."""
        self.committing.pop(intent.cell, None)
        if self.session.fetch_generation != intent.fetch_generation:
            # a reload landed while this update was in flight; the reloaded rows win
            log_action(logger, self.module, "edit.commit", intent.record_id, "superseded", field=intent.field)
            return self.session.find_record(intent.record_id, derived=intent.derived)

        changes = _authoritative_changes(returned) or {intent.field: intent.proposed_value}
        self.session.patch_record(intent.record_id, changes, derived=intent.derived)
        log_action(logger, self.module, "edit.commit", intent.record_id, "success", field=intent.field)
        return self.session.find_record(intent.record_id, derived=intent.derived)

    def resolve_failure(self, intent: EditIntent, error: Exception) -> MutationFailure:
        """COMMITTING -> IDLE after the update failed. Reloads the source collection."""
        self.committing.pop(intent.cell, None)
        failure = _as_mutation_failure(error)
        log_action(
            logger,
            self.module,
            "edit.commit",
            intent.record_id,
            "failure",
            field=intent.field,
            code=failure.code,
            trace_id=failure.trace_id,
        )
        try:
            self.refetch()
        except TableError as refetch_error:
            log_action(logger, self.module, "edit.rollback", intent.record_id, "failure", code=refetch_error.code)
            self.session.patch_record(intent.record_id, {intent.field: intent.original_value}, derived=intent.derived)
        return failure

    def commit(self, value: Any = _UNSET) -> dict[str, Any] | None:
        """Submit the editing cell and send exactly one update to the store."""
        intent = self.submit(value)
        writer = self.derived_writer if intent.derived else self.writer
        try:
            returned = writer(intent.record_id, {intent.field: intent.proposed_value})
        except Exception as exc:
            failure = self.resolve_failure(intent, exc)
            if failure is exc:
                raise
            raise failure from exc
        return self.resolve_success(intent, returned)

    def on_key(self, key: str) -> dict[str, Any] | None:
        if self.editing is None:
            return None
        if key in ACCEPT_KEYS:
            return self.commit()
        if key in CANCEL_KEYS:
            self.cancel()
        return None

    def on_blur(self) -> dict[str, Any] | None:
        if self.editing is None:
            return None
        return self.commit()

    def _require_editing(self) -> EditIntent:
        if self.editing is None:
            raise ValidationFailure(code="NO_ACTIVE_EDIT", message="No cell is being edited")
        return self.editing


def _authoritative_changes(returned: dict[str, Any] | None) -> dict[str, Any]:
    if not isinstance(returned, dict):
        return {}
    return {key: value for key, value in returned.items() if key != "id"}


def _as_mutation_failure(error: Exception) -> MutationFailure:
    if isinstance(error, MutationFailure):
        return error
    if isinstance(error, TableError):
        return MutationFailure(
            code=error.code,
            message=error.message,
            details=error.details,
            trace_id=error.trace_id,
            status_code=error.status_code,
        )
    return MutationFailure(code="INTERNAL_ERROR", message=str(error) or "An unexpected error occurred.")
