#!/usr/bin/env python3
"""
Operator command-line tools for the URL collection.

Usage:
    shorturl-admin list
    shorturl-admin normalize [--dry-run]
    shorturl-admin init-db

These run outside the web service and talk to the database configured
through DATABASE_URL.
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from loguru import logger

from shorturl.core.logging import setup_logging
from shorturl.db.base import create_tables, dispose_engine, get_session
from shorturl.models.url import UrlRecordRead
from shorturl.repositories.url_repository import URLRepository
from shorturl.services.exceptions import MaintenanceError
from shorturl.services.maintenance import MaintenanceService


async def cmd_list(service: MaintenanceService, args: argparse.Namespace) -> int:
    """Print every record, one JSON document per line."""
    async with get_session() as db:
        records = await service.list_records(db)

    for record in records:
        print(UrlRecordRead.model_validate(record).model_dump_json())
    logger.info(f"Listed {len(records)} URL records")
    return 0


async def cmd_normalize(service: MaintenanceService, args: argparse.Namespace) -> int:
    """Strip the scheme from stored URLs and print a summary."""
    async with get_session() as db:
        result = await service.normalize_stored_urls(db, dry_run=args.dry_run)

    print(json.dumps(result, indent=2))
    return 0


async def cmd_init_db(service: MaintenanceService, args: argparse.Namespace) -> int:
    """Create the url_records table if it is missing."""
    await create_tables()
    print("Database tables created")
    return 0


COMMANDS = {
    "list": cmd_list,
    "normalize": cmd_normalize,
    "init-db": cmd_init_db,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shorturl-admin",
        description="Maintenance tools for the URL shortener database",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Print every stored URL record")

    normalize = subparsers.add_parser(
        "normalize",
        help="Strip the http(s) scheme from stored original URLs",
    )
    normalize.add_argument(
        "--dry-run",
        action="store_true",
        help="Report the rewrites without applying them",
    )

    subparsers.add_parser("init-db", help="Create the database tables")
    return parser


async def run_command(args: argparse.Namespace) -> int:
    service = MaintenanceService(url_repository=URLRepository())
    try:
        return await COMMANDS[args.command](service, args)
    except MaintenanceError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await dispose_engine()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return asyncio.run(run_command(args))


if __name__ == "__main__":
    sys.exit(main())
