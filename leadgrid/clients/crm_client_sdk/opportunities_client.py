from __future__ import annotations

from typing import Any

from leadgrid.clients.crm_client_sdk.http_client import HttpClient
from leadgrid.clients.crm_client_sdk.leads_client import new_record_id
from leadgrid.clients.crm_client_sdk.normalizers import build_query_params, normalize_rows, normalize_search_term

OPPORTUNITIES_PATH = "/opportunities"


class OpportunitiesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def find_opportunities(
        self,
        search: str | None = None,
        sort: str = "id",
        order: str = "desc",
    ) -> list[dict[str, Any]]:
        params = build_query_params(q=normalize_search_term(search), _sort=sort, _order=order)
        payload = self.http_client.request("GET", OPPORTUNITIES_PATH, params=params)
        return normalize_rows(payload)

    def create_opportunity(self, opportunity_payload: dict[str, Any]) -> dict[str, Any]:
        body = {**opportunity_payload, "id": new_record_id()}
        return self.http_client.request("POST", OPPORTUNITIES_PATH, json_body=body)

    def update_opportunity(self, opportunity_id: int | str, changes: dict[str, Any]) -> dict[str, Any]:
        body = {key: value for key, value in changes.items() if key != "id"}
        return self.http_client.request("PATCH", f"{OPPORTUNITIES_PATH}/{opportunity_id}", json_body=body)

    def delete_opportunity(self, opportunity_id: int | str) -> dict[str, Any]:
        return self.http_client.request("DELETE", f"{OPPORTUNITIES_PATH}/{opportunity_id}")
