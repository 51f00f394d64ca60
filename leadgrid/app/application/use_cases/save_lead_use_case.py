from __future__ import annotations

from collections.abc import Callable
from typing import Any

from leadgrid.app.domain.errors import MutationFailure, ValidationFailure
from leadgrid.app.domain.models.lead import validate_lead
from leadgrid.app.infrastructure.logging.logger import get_logger, log_action
from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.ui.forms import DraftForm, FormStatus

logger = get_logger(__name__)


class SaveLeadUseCase:
    """Create a lead from a draft, or update the lead the draft was opened for.

    On any failure the draft keeps its values and moves to ERROR so the form
    stays open for correction. Creation is never retried.
    """

    def __init__(self, adapter: CrmAdapter, refetch: Callable[[], Any]) -> None:
        self.adapter = adapter
        self.refetch = refetch

    def execute(self, draft: DraftForm) -> dict[str, Any]:
        try:
            payload = validate_lead(draft.values)
        except ValidationFailure as failure:
            draft.status = FormStatus.ERROR
            draft.field_errors = failure.field_errors
            draft.error_message = failure.message
            raise

        draft.status = FormStatus.SUBMITTING
        action = "leads.create" if draft.record_id is None else "leads.update"
        try:
            if draft.record_id is None:
                saved = self.adapter.create_lead(payload)
            else:
                saved = self.adapter.update_lead(draft.record_id, payload)
        except MutationFailure as failure:
            draft.status = FormStatus.ERROR
            draft.error_message = failure.message
            raise

        draft.status = FormStatus.SUCCESS
        draft.field_errors = {}
        draft.error_message = None
        log_action(logger, "leads", action, saved.get("id", draft.record_id), "success")
        self.refetch()
        return saved
