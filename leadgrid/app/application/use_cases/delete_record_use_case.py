from __future__ import annotations

from collections.abc import Callable
from typing import Any

from leadgrid.app.domain.errors import ValidationFailure
from leadgrid.app.domain.models.lead import LOST_STATUS
from leadgrid.app.infrastructure.logging.logger import get_logger, log_action
from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.state import TableSession
from leadgrid.app.table.merge import record_key

logger = get_logger(__name__)


class DeleteLeadUseCase:
    def __init__(self, adapter: CrmAdapter, session: TableSession, refetch: Callable[[], Any]) -> None:
        self.adapter = adapter
        self.session = session
        self.refetch = refetch

    def execute(self, lead_id: Any) -> None:
        if self.session.find_record(lead_id) is None:
            raise ValidationFailure(code="RECORD_NOT_FOUND", message=f"Lead {lead_id} is not loaded", details={"id": str(lead_id)})
        # failure propagates and leaves the row in place
        self.adapter.delete_lead(lead_id)
        log_action(logger, "leads", "leads.delete", lead_id, "success")
        self.refetch()


class DeleteOpportunityUseCase:
    """Delete an opportunity row.

    A converted-lead row is not an opportunity in the store: removing it from
    the table marks the source lead as lost instead.
    """

    def __init__(self, adapter: CrmAdapter, session: TableSession, refetch: Callable[[], Any]) -> None:
        self.adapter = adapter
        self.session = session
        self.refetch = refetch

    def execute(self, record_id: Any, derived: bool = False) -> None:
        if self.session.find_record(record_id, derived=derived) is None:
            raise ValidationFailure(
                code="RECORD_NOT_FOUND",
                message=f"Opportunity {record_id} is not loaded",
                details={"id": str(record_id)},
            )
        if derived:
            self.adapter.update_lead(record_id, {"status": LOST_STATUS})
            log_action(logger, "opportunities", "leads.mark_lost", record_id, "success")
        else:
            self.adapter.delete_opportunity(record_id)
            log_action(logger, "opportunities", "opportunities.delete", record_id, "success")
        self.refetch()

    def execute_row(self, row: dict[str, Any]) -> None:
        derived, record_id = record_key(row)
        self.execute(record_id, derived=derived)
