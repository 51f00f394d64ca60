from __future__ import annotations

import argparse
import sys

from leadgrid.app.application.screens import LeadsScreen, OpportunitiesScreen
from leadgrid.app.config import AppConfig
from leadgrid.app.domain.errors import TableError
from leadgrid.app.infrastructure.errors.error_mapper import ErrorMapper
from leadgrid.app.infrastructure.logging.logger import configure_logging
from leadgrid.app.infrastructure.sdk_adapter.crm_adapter import CrmAdapter
from leadgrid.app.table.comparator import SortDirection, SortDirective
from leadgrid.app.ui.filters import ALL_FILTER
from leadgrid.app.ui.listing_view import PAGE_SIZE_OPTIONS
from leadgrid.app.ui.table_printer import print_table
from leadgrid.clients.crm_client_sdk.http_client import HttpClient


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse the CRM leads and opportunities tables")
    parser.add_argument("table", choices=("leads", "opportunities"))
    parser.add_argument("--search", default="", help="free-text search over name and company/account")
    parser.add_argument("--filter", default=ALL_FILTER, help="status (leads) or stage (opportunities); 'all' for none")
    parser.add_argument("--sort", default=None, help="column to sort by")
    parser.add_argument("--desc", action="store_true", help="sort descending")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"rows per page (usual choices: {', '.join(str(size) for size in PAGE_SIZE_OPTIONS)})",
    )
    return parser


def run(argv: list[str] | None = None, config: AppConfig | None = None, http: HttpClient | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = (config or AppConfig()).validate_config()
    except ValueError as error:
        print(f"[CONFIG_ERROR] {error}", file=sys.stderr)
        return 1
    configure_logging(config.log_level.strip())
    http = http or HttpClient(config=config.to_sdk_config())
    adapter = CrmAdapter(http)
    page_size = args.page_size if args.page_size is not None else config.default_page_size

    try:
        screen_type = LeadsScreen if args.table == "leads" else OpportunitiesScreen
        screen = screen_type(adapter, page_size, debounce_ms=config.search_debounce_ms)
        session = screen.session
        session.set_search(args.search)
        session.set_filter(args.filter)
        if args.sort:
            direction = SortDirection.DESC if args.desc else SortDirection.ASC
            session.set_sort(SortDirective(property=args.sort, direction=direction))
        session.goto_page(args.page)
        screen.refresh()
        view = screen.view()
    except TableError as error:
        print(ErrorMapper.to_display_message(error), file=sys.stderr)
        return 1

    print_table(args.table.capitalize(), view.rows, session.columns, view.metadata)
    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
