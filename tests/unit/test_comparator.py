from leadgrid.app.table.comparator import SortDirection, SortDirective, compare_values, sort_records

ASC = SortDirection.ASC
DESC = SortDirection.DESC


def test_compare_numbers_and_strings_by_direction() -> None:
    assert compare_values(1, 2, ASC) == -1
    assert compare_values(1, 2, DESC) == 1
    assert compare_values(2.5, 2.5, ASC) == 0
    assert compare_values("alpha", "bravo", ASC) == -1
    assert compare_values("alpha", "bravo", DESC) == 1


def test_string_comparison_ignores_case_first() -> None:
    assert compare_values("apple", "Banana", ASC) == -1
    assert compare_values("Banana", "cherry", ASC) == -1


def test_direction_reverses_every_non_equal_pair() -> None:
    values = [None, 0, 3, -7, 2.5, "delta", "alpha", "Charlie"]
    for a in values:
        for b in values:
            ascending = compare_values(a, b, ASC)
            if ascending == 0:
                assert compare_values(a, b, DESC) == 0
            else:
                assert compare_values(a, b, DESC) == -ascending


def test_nulls_first_when_ascending_last_when_descending() -> None:
    assert compare_values(None, None, ASC) == 0
    assert compare_values(None, 5, ASC) == -1
    assert compare_values(5, None, ASC) == 1
    assert compare_values(None, 5, DESC) == 1
    assert compare_values("x", None, DESC) == -1


def test_mixed_types_are_equal() -> None:
    assert compare_values("10", 10, ASC) == 0
    assert compare_values(True, 3, ASC) == 0
    assert compare_values([1], [2], DESC) == 0


def test_sort_records_is_stable_for_equal_keys_in_both_directions() -> None:
    rows = [
        {"id": 1, "status": "New"},
        {"id": 2, "status": "Lost"},
        {"id": 3, "status": "New"},
        {"id": 4, "status": "Lost"},
        {"id": 5, "status": "New"},
    ]

    ascending = sort_records(rows, SortDirective("status", ASC))
    descending = sort_records(rows, SortDirective("status", DESC))

    assert [row["id"] for row in ascending] == [2, 4, 1, 3, 5]
    assert [row["id"] for row in descending] == [1, 3, 5, 2, 4]


def test_null_rows_sit_at_one_edge_regardless_of_count() -> None:
    rows = [{"id": 1, "amount": 5}, {"id": 2, "amount": None}, {"id": 3, "amount": 1}, {"id": 4}, {"id": 5, "amount": 9}]

    ascending = sort_records(rows, SortDirective("amount", ASC))
    descending = sort_records(rows, SortDirective("amount", DESC))

    assert [row["id"] for row in ascending] == [2, 4, 3, 1, 5]
    assert [row["id"] for row in descending] == [5, 1, 3, 2, 4]


def test_sort_records_without_directive_keeps_order_and_copies() -> None:
    rows = [{"id": 2}, {"id": 1}]

    result = sort_records(rows, None)

    assert result == rows
    assert result is not rows


def test_toggle_flips_same_column_and_starts_new_column_ascending() -> None:
    sort = SortDirective("score", DESC)

    assert sort.toggle("score") == SortDirective("score", ASC)
    assert sort.toggle("name") == SortDirective("name", ASC)


def test_accented_names_sort_with_their_base_letter() -> None:
    rows = [{"name": "Zoe"}, {"name": "Émile"}, {"name": "Ana"}, {"name": "Ángel"}]

    ordered = sort_records(rows, SortDirective(property="name", direction=ASC))

    assert [row["name"] for row in ordered] == ["Ana", "Ángel", "Émile", "Zoe"]
    assert compare_values("Émile", "Zoe", ASC) == -1
    assert compare_values("Émile", "Zoe", DESC) == 1
