from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from leadgrid.app.domain.errors import FetchFailure, MutationFailure, TableError
from leadgrid.app.domain.models.lead import CONVERTED_STATUS
from leadgrid.app.infrastructure.logging.logger import get_logger, log_action
from leadgrid.clients.crm_client_sdk.errors import ApiError
from leadgrid.clients.crm_client_sdk.http_client import HttpClient
from leadgrid.clients.crm_client_sdk.leads_client import LeadsClient
from leadgrid.clients.crm_client_sdk.opportunities_client import OpportunitiesClient

T = TypeVar("T")

logger = get_logger(__name__)


class CrmAdapter:
    """Remote reader and writer for the leads and opportunities collections."""

    def __init__(self, http: HttpClient) -> None:
        self.leads = LeadsClient(http_client=http)
        self.opportunities = OpportunitiesClient(http_client=http)

    def fetch_leads(self, search_text: str = "") -> list[dict[str, Any]]:
        return _read("leads.fetch", lambda: self.leads.find_leads(search=search_text))

    def fetch_converted_leads(self, search_text: str = "") -> list[dict[str, Any]]:
        return _read(
            "leads.fetch_converted",
            lambda: self.leads.find_leads(search=search_text, status=CONVERTED_STATUS, sort="id", order="desc"),
        )

    def fetch_opportunities(self, search_text: str = "") -> list[dict[str, Any]]:
        return _read("opportunities.fetch", lambda: self.opportunities.find_opportunities(search=search_text))

    def create_lead(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _write("leads.create", None, lambda: self.leads.create_lead(fields))

    def update_lead(self, lead_id: Any, changes: dict[str, Any]) -> dict[str, Any]:
        return _write("leads.update", lead_id, lambda: self.leads.update_lead(lead_id, changes))

    def delete_lead(self, lead_id: Any) -> dict[str, Any]:
        return _write("leads.delete", lead_id, lambda: self.leads.delete_lead(lead_id))

    def create_opportunity(self, fields: dict[str, Any]) -> dict[str, Any]:
        return _write("opportunities.create", None, lambda: self.opportunities.create_opportunity(fields))

    def update_opportunity(self, opportunity_id: Any, changes: dict[str, Any]) -> dict[str, Any]:
        return _write(
            "opportunities.update",
            opportunity_id,
            lambda: self.opportunities.update_opportunity(opportunity_id, changes),
        )

    def delete_opportunity(self, opportunity_id: Any) -> dict[str, Any]:
        return _write("opportunities.delete", opportunity_id, lambda: self.opportunities.delete_opportunity(opportunity_id))


def _read(action: str, call: Callable[[], T]) -> T:
    try:
        result = call()
    except ApiError as error:
        log_action(logger, "crm_adapter", action, None, "failure", code=error.code, trace_id=error.trace_id)
        raise _translate(FetchFailure, error) from error
    log_action(logger, "crm_adapter", action, None, "success")
    return result


def _write(action: str, record_id: Any, call: Callable[[], T]) -> T:
    try:
        result = call()
    except ApiError as error:
        log_action(logger, "crm_adapter", action, record_id, "failure", code=error.code, trace_id=error.trace_id)
        raise _translate(MutationFailure, error) from error
    log_action(logger, "crm_adapter", action, record_id, "success")
    return result


def _translate(kind: type[TableError], error: ApiError) -> TableError:
    return kind(
        code=error.code,
        message=error.message,
        details=error.details,
        trace_id=error.trace_id,
        status_code=error.status_code,
    )
