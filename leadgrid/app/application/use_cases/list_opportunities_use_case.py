from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.state import TableSession


class ListOpportunitiesUseCase:
    """Loads opportunities together with the converted leads shown beside them."""

    def __init__(self, adapter: CrmAdapter, session: TableSession) -> None:
        self.adapter = adapter
        self.session = session

    def execute(self) -> list[dict]:
        term = self.session.params.search_text.strip()
        opportunities = self.adapter.fetch_opportunities(term)
        converted_leads = self.adapter.fetch_converted_leads(term)
        self.session.replace_records(opportunities, secondary=converted_leads)
        return self.session.records
