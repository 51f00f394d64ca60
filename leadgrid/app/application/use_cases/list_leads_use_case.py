from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.state import TableSession


class ListLeadsUseCase:
    def __init__(self, adapter: CrmAdapter, session: TableSession) -> None:
        self.adapter = adapter
        self.session = session

    def execute(self) -> list[dict]:
        leads = self.adapter.fetch_leads(self.session.params.search_text.strip())
        self.session.replace_records(leads)
        return self.session.records
