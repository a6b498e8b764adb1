#!/usr/bin/env python3
"""Export an admin resource list to CSV from the command line.

Runs the same filtered, capped export as the console's export button and
writes `<resource>-export-<date>.csv` (or `--output`). The API URL and token
come from CLI flags or the `ADMIN_CONSOLE_API_URL` / `ADMIN_CONSOLE_TOKEN`
environment variables, optionally loaded from a dotenv file.

Example:

    python scripts/export_resource.py users --filter role=ADMIN --search jean
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from loguru import logger

from admin_console.admin_client import AdminAPIError, AdminClient
from admin_console.exports import export_resource
from admin_console.listing import ListQuery
from admin_console.resources import RESOURCES, get_resource


def parse_args() -> argparse.Namespace:
    """Configure CLI arguments."""
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("resource", choices=sorted(RESOURCES), help="Resource list to export")
    parser.add_argument(
        "--env-file",
        default=".env.local",
        help="Path to the dotenv file with console settings (default: %(default)s)",
    )
    parser.add_argument("--api-url", help="Admin API base url (falls back to ADMIN_CONSOLE_API_URL)")
    parser.add_argument("--token", help="Admin bearer token (falls back to ADMIN_CONSOLE_TOKEN)")
    parser.add_argument("--search", default="", help="Search term applied to the list")
    parser.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="UI filter value, repeatable (e.g. --filter status=unverified)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Export row cap (default: ADMIN_CONSOLE_EXPORT_LIMIT or 1000)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Destination file (default: generated name)")
    return parser.parse_args()


def parse_filters(pairs: List[str]) -> Dict[str, str]:
    filters: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise SystemExit(f"Invalid filter {pair!r}; expected NAME=VALUE")
        filters[name.strip()] = value.strip()
    return filters


def main() -> None:
    args = parse_args()
    if args.env_file and os.path.exists(args.env_file):
        load_dotenv(args.env_file, override=False)

    api_url = args.api_url or os.getenv("ADMIN_CONSOLE_API_URL") or "http://localhost:8000/api"
    token = args.token or os.getenv("ADMIN_CONSOLE_TOKEN")
    if not token:
        raise SystemExit("Missing admin token. Provide --token or set ADMIN_CONSOLE_TOKEN.")
    limit = args.limit or int(os.getenv("ADMIN_CONSOLE_EXPORT_LIMIT") or 1000)

    spec = get_resource(args.resource)
    query = ListQuery(page_size=spec.page_size, filters=parse_filters(args.filter), search=args.search)
    try:
        export = export_resource(AdminClient(api_url, token), spec, query, limit=limit)
    except AdminAPIError as exc:
        logger.error("Export failed: {error}", error=exc.message)
        raise SystemExit(1) from exc

    output = args.output or Path(export.filename)
    output.write_text(export.content, encoding="utf-8")
    print(f"Wrote {export.row_count} rows to {output}.")


if __name__ == "__main__":
    main()
