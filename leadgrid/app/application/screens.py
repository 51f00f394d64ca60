from __future__ import annotations

from collections.abc import Callable
from typing import Any

from leadgrid.app.application.optimistic_edit import OptimisticEditCoordinator
from leadgrid.app.application.tables import LEADS_INLINE_FIELDS, leads_session, opportunities_session
from leadgrid.app.application.use_cases.convert_lead_use_case import ConvertLeadUseCase
from leadgrid.app.application.use_cases.delete_record_use_case import DeleteLeadUseCase, DeleteOpportunityUseCase
from leadgrid.app.application.use_cases.list_leads_use_case import ListLeadsUseCase
from leadgrid.app.application.use_cases.list_opportunities_use_case import ListOpportunitiesUseCase
from leadgrid.app.application.use_cases.save_lead_use_case import SaveLeadUseCase
from leadgrid.app.domain.errors import ValidationFailure
from leadgrid.app.domain.models.lead import validate_lead_field
from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.state import TableSession
from leadgrid.app.table.view_engine import TableView
from leadgrid.app.ui.filters import debounce_text
from leadgrid.app.ui.forms import DraftForm
from leadgrid.app.ui.listing_view import DEFAULT_PAGE_SIZE


def _validate_inline_lead_field(record: dict[str, Any], field: str, value: Any) -> Any:
    if field not in LEADS_INLINE_FIELDS:
        raise ValidationFailure(
            code="VALIDATION_ERROR",
            message=f"{field} cannot be edited in place",
            details={field: "read-only"},
        )
    return validate_lead_field(record, field, value)


class LeadsScreen:
    def __init__(self, adapter: CrmAdapter, page_size: int = DEFAULT_PAGE_SIZE, debounce_ms: int = 0) -> None:
        self.adapter = adapter
        self.debounce_ms = debounce_ms
        self.session: TableSession = leads_session(page_size)
        self._list = ListLeadsUseCase(adapter, self.session)
        self.edits = OptimisticEditCoordinator(
            self.session,
            writer=adapter.update_lead,
            refetch=self.refresh,
            validator=_validate_inline_lead_field,
            module="leads",
        )
        self._save = SaveLeadUseCase(adapter, refetch=self.refresh)
        self._convert = ConvertLeadUseCase(adapter, refetch=self.refresh)
        self._delete = DeleteLeadUseCase(adapter, self.session, refetch=self.refresh)

    def refresh(self) -> None:
        self._list.execute()

    def view(self) -> TableView:
        return self.session.view()

    def search(self, text: str, sleeper: Callable[[float], None] | None = None) -> None:
        """Apply a debounced search term; the store is queried again when the trimmed term changes."""
        previous = self.session.params.search_text.strip()
        self.session.set_search(debounce_text(text, self.debounce_ms, sleeper))
        if self.session.params.search_text.strip() != previous:
            self.refresh()

    def save(self, draft: DraftForm) -> dict[str, Any]:
        return self._save.execute(draft)

    def convert(self, draft: DraftForm) -> dict[str, Any]:
        return self._convert.execute(draft)

    def delete(self, lead_id: Any) -> None:
        self._delete.execute(lead_id)


class OpportunitiesScreen:
    def __init__(self, adapter: CrmAdapter, page_size: int = DEFAULT_PAGE_SIZE, debounce_ms: int = 0) -> None:
        self.adapter = adapter
        self.debounce_ms = debounce_ms
        self.session: TableSession = opportunities_session(page_size)
        self._list = ListOpportunitiesUseCase(adapter, self.session)
        self._delete = DeleteOpportunityUseCase(adapter, self.session, refetch=self.refresh)

    def refresh(self) -> None:
        self._list.execute()

    def view(self) -> TableView:
        return self.session.view()

    def search(self, text: str, sleeper: Callable[[float], None] | None = None) -> None:
        previous = self.session.params.search_text.strip()
        self.session.set_search(debounce_text(text, self.debounce_ms, sleeper))
        if self.session.params.search_text.strip() != previous:
            self.refresh()

    def delete(self, row: dict[str, Any]) -> None:
        self._delete.execute_row(row)
