from __future__ import annotations

import time
from typing import Any

from leadgrid.clients.crm_client_sdk.http_client import HttpClient
from leadgrid.clients.crm_client_sdk.normalizers import build_query_params, normalize_rows, normalize_search_term

LEADS_PATH = "/leads"


class LeadsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def find_leads(
        self,
        search: str | None = None,
        status: str | None = None,
        sort: str = "score",
        order: str = "desc",
    ) -> list[dict[str, Any]]:
        params = build_query_params(q=normalize_search_term(search), status=status, _sort=sort, _order=order)
        payload = self.http_client.request("GET", LEADS_PATH, params=params)
        return normalize_rows(payload)

    def create_lead(self, lead_payload: dict[str, Any]) -> dict[str, Any]:
        body = {**lead_payload, "id": new_record_id()}
        return self.http_client.request("POST", LEADS_PATH, json_body=body)

    def update_lead(self, lead_id: int | str, changes: dict[str, Any]) -> dict[str, Any]:
        body = {key: value for key, value in changes.items() if key != "id"}
        return self.http_client.request("PATCH", f"{LEADS_PATH}/{lead_id}", json_body=body)

    def delete_lead(self, lead_id: int | str) -> dict[str, Any]:
        return self.http_client.request("DELETE", f"{LEADS_PATH}/{lead_id}")


def new_record_id() -> int:
    return int(time.time() * 1000)
