import logging

import pytest

from leadgrid.app.domain.models.opportunity import CONVERTED_LEAD_STAGE, converted_lead_to_opportunity
from leadgrid.app.table.merge import IS_DERIVED, ORIGIN, ORIGIN_ID, find_identity_collisions, project, record_key

OPPORTUNITIES = [
    {"id": 10, "name": "Renewal", "stage": "Proposal", "amount": 1200, "accountName": "Acme"},
    {"id": 11, "name": "Upsell", "stage": "Negotiation", "amount": 300, "accountName": "Globex"},
]
CONVERTED = [
    {"id": 20, "name": "Ana", "company": "Initech", "email": "ana@initech.io", "source": "web", "score": 70, "status": "Converted"},
]


def test_projected_rows_keep_source_identity_and_are_tagged() -> None:
    merged = project(OPPORTUNITIES, CONVERTED, converted_lead_to_opportunity)

    assert [row["id"] for row in merged] == [10, 11, 20]
    assert [row[IS_DERIVED] for row in merged] == [False, False, True]
    derived = merged[2]
    assert derived[ORIGIN_ID] == 20
    assert derived[ORIGIN] is CONVERTED[0]
    assert derived["stage"] == CONVERTED_LEAD_STAGE
    assert derived["accountName"] == "Initech"
    assert derived["amount"] is None
    assert merged[0][ORIGIN_ID] == 10


def test_project_does_not_mutate_inputs() -> None:
    project(OPPORTUNITIES, CONVERTED, converted_lead_to_opportunity)

    assert IS_DERIVED not in OPPORTUNITIES[0]
    assert IS_DERIVED not in CONVERTED[0]


def test_rule_that_changes_identity_is_rejected() -> None:
    with pytest.raises(ValueError):
        project([], CONVERTED, lambda lead: {**converted_lead_to_opportunity(lead), "id": "lead-20"})


def test_id_collision_keeps_both_rows_and_logs_warning(caplog) -> None:
    clashing = [{**CONVERTED[0], "id": 10}]

    with caplog.at_level(logging.WARNING, logger="leadgrid.app.table.merge"):
        merged = project(OPPORTUNITIES, clashing, converted_lead_to_opportunity)

    assert len(merged) == 3
    assert find_identity_collisions(merged) == {10}
    assert record_key(merged[0]) == (False, 10)
    assert record_key(merged[2]) == (True, 10)
    assert any("identity_collision" in message for message in caplog.messages)
