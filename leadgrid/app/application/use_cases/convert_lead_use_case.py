from __future__ import annotations

from collections.abc import Callable
from typing import Any

from leadgrid.app.domain.errors import MutationFailure, ValidationFailure
from leadgrid.app.domain.models.lead import CONVERTED_STATUS
from leadgrid.app.domain.models.opportunity import validate_opportunity
from leadgrid.app.infrastructure.logging.logger import get_logger, log_action
from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.ui.forms import DraftForm, FormStatus

logger = get_logger(__name__)


class ConvertLeadUseCase:
    """Create an opportunity from a lead, then mark the lead as converted."""

    def __init__(self, adapter: CrmAdapter, refetch: Callable[[], Any]) -> None:
        self.adapter = adapter
        self.refetch = refetch

    def execute(self, draft: DraftForm) -> dict[str, Any]:
        if draft.record_id is None:
            raise ValidationFailure(code="VALIDATION_ERROR", message="No lead selected for conversion", details={"id": "required"})
        try:
            payload = validate_opportunity(draft.values)
        except ValidationFailure as failure:
            draft.status = FormStatus.ERROR
            draft.field_errors = failure.field_errors
            draft.error_message = failure.message
            raise

        draft.status = FormStatus.SUBMITTING
        try:
            opportunity = self.adapter.create_opportunity(payload)
            self.adapter.update_lead(draft.record_id, {"status": CONVERTED_STATUS})
        except MutationFailure as failure:
            draft.status = FormStatus.ERROR
            draft.error_message = failure.message
            raise

        draft.status = FormStatus.SUCCESS
        log_action(logger, "leads", "leads.convert", draft.record_id, "success", opportunity_id=opportunity.get("id"))
        self.refetch()
        return opportunity
