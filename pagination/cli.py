"""Print one page of a SQL query run against a DuckDB database.

Usage:
    paginate-sql "select * from measurements where unit = ?" --param kW --page 2
    paginate-sql "select * from measurements" --order "value DESC" --page-size 50
"""

import argparse
import json
import sys
from pathlib import Path

from .db import connect, get_default_page_size
from .errors import PaginationError
from .executor import DuckDBExecutor
from .mappers import dict_rows
from .paginator import Paginator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("query", help="Base query without order/limit/offset")
    parser.add_argument("--db", type=Path, help="DuckDB file (default: $PAGINATION_DB_PATH or in-memory)")
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        help="Positional bind parameter, repeat for each placeholder",
    )
    parser.add_argument(
        "--order",
        action="append",
        default=[],
        help='Sort spec such as "id DESC", repeat for more columns',
    )
    parser.add_argument("--page", type=int, default=1, help="1-based page number")
    parser.add_argument("--page-size", type=int, help="Rows per page")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        page_size = args.page_size if args.page_size is not None else get_default_page_size()
        with connect(args.db, read_only=True) as connection:
            paginator = Paginator(page_size, args.page, DuckDBExecutor(connection))
            paginator.set_raw_query(args.query, *args.param)
            paginator.set_order(*args.order)
            envelope = paginator.json(dict_rows)
    except PaginationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(envelope, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
