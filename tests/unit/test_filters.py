from leadgrid.app.ui.filters import ALL_FILTER, debounce_text, filter_records

FIELDS = ("name", "company")

LEADS = [
    {"id": 1, "name": "Ana Lopez", "company": "Acme", "status": "New"},
    {"id": 2, "name": "Bruno", "company": "Globex", "status": "Qualified"},
    {"id": 3, "name": "Carla", "company": None, "status": "Qualified"},
    {"id": 4, "company": "acme labs", "status": "Lost"},
    {"id": 5, "name": "Dario", "company": "Initech", "status": "New"},
]


def _ids(rows):
    return [row["id"] for row in rows]


def test_search_is_trimmed_case_insensitive_and_matches_any_field() -> None:
    assert _ids(filter_records(LEADS, "  ACME ", ALL_FILTER, FIELDS, "status")) == [1, 4]
    assert _ids(filter_records(LEADS, "bru", ALL_FILTER, FIELDS, "status")) == [2]


def test_empty_search_applies_no_text_filter() -> None:
    assert _ids(filter_records(LEADS, "   ", ALL_FILTER, FIELDS, "status")) == [1, 2, 3, 4, 5]
    assert _ids(filter_records(LEADS, None, None, FIELDS, "status")) == [1, 2, 3, 4, 5]


def test_missing_and_null_fields_never_match_or_raise() -> None:
    assert filter_records(LEADS, "none", ALL_FILTER, FIELDS, "status") == []


def test_categorical_filter_is_exact_match() -> None:
    assert _ids(filter_records(LEADS, "", "Qualified", FIELDS, "status")) == [2, 3]
    assert filter_records(LEADS, "", "qualified", FIELDS, "status") == []


def test_filters_are_conjunctive_and_keep_input_order() -> None:
    by_text = filter_records(LEADS, "a", ALL_FILTER, FIELDS, "status")
    by_category = filter_records(LEADS, "", "New", FIELDS, "status")
    both = filter_records(LEADS, "a", "New", FIELDS, "status")

    assert _ids(both) == [1, 5]
    assert all(row in by_text and row in by_category for row in both)


def test_debounce_text_waits_configured_time() -> None:
    sleeps: list[float] = []

    result = debounce_text("acme", wait_ms=500, sleeper=lambda seconds: sleeps.append(seconds))

    assert result == "acme"
    assert sleeps == [0.5]
    assert debounce_text("acme", wait_ms=0, sleeper=lambda seconds: sleeps.append(seconds)) == "acme"
    assert sleeps == [0.5]
