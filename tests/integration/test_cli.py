from __future__ import annotations

from leadgrid.app.config import AppConfig
from leadgrid.app.main import build_parser, run


def _config() -> AppConfig:
    return AppConfig(_env_file=None)


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["opportunities"])

    assert args.table == "opportunities"
    assert args.filter == "all"
    assert args.page == 1
    assert args.page_size is None


def test_cli_prints_requested_page(crm_http, capsys) -> None:
    exit_code = run(["leads", "--page", "2", "--page-size", "2"], config=_config(), http=crm_http)

    out = capsys.readouterr().out
    assert exit_code == 0
    lines = out.strip().splitlines()
    assert lines[0] == "Leads"
    assert "Actions" not in lines[1]
    assert lines[3].startswith("3 ")
    assert lines[4].startswith("4 ")
    assert lines[-1] == "Showing 3 to 4 of 4 entries  (page 2/2)"


def test_cli_sorts_and_filters(crm_http, capsys) -> None:
    exit_code = run(["leads", "--sort", "name", "--filter", "Qualified"], config=_config(), http=crm_http)

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Bruno Lima" in out
    assert "Ana Torres" not in out
    assert "Showing 1 to 1 of 1 entries" in out


def test_cli_marks_converted_lead_rows(crm_http, capsys) -> None:
    run(["opportunities", "--filter", "Converted Lead"], config=_config(), http=crm_http)

    out = capsys.readouterr().out
    assert "3*" in out
    assert "Converted Lead" in out


def test_cli_reports_store_errors(crm_store, crm_http, capsys) -> None:
    crm_store.fail("GET", "/leads", 500)

    exit_code = run(["leads"], config=_config(), http=crm_http)

    assert exit_code == 1
    assert "[SERVER_ERROR] store unavailable (trace_id=trace-fake)" in capsys.readouterr().err


def test_cli_rejects_invalid_page_size(crm_http, capsys) -> None:
    exit_code = run(["leads", "--page-size", "0"], config=_config(), http=crm_http)

    assert exit_code == 1
    assert "[VALIDATION_ERROR] page_size must be >= 1" in capsys.readouterr().err


def test_cli_rejects_unknown_log_level(crm_store, crm_http, capsys) -> None:
    exit_code = run(["leads"], config=AppConfig(_env_file=None, log_level="verbose"), http=crm_http)

    assert exit_code == 1
    assert "[CONFIG_ERROR] LEADGRID_LOG_LEVEL must be one of" in capsys.readouterr().err
    assert crm_store.requests == []
