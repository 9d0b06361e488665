"""Maintenance entry point: bring PostGIS up to date on a running engine.

Usage: postgis-update [--target-version X] [--check] [extra_db ...]
"""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from .config import (
    TEMPLATE_DATABASE,
    configure_logging,
    get_primary_database,
    get_target_version,
    target_databases,
)
from .db import EngineSession
from .exceptions import PostgisInitError
from .provision import update, verify

load_dotenv()

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create or update PostGIS in template_postgis, the primary database and any extras."
    )
    parser.add_argument(
        "databases",
        nargs="*",
        help="Additional databases to update after the template and primary databases",
    )
    parser.add_argument(
        "--target-version",
        default=None,
        help="PostGIS version to update to (defaults to $POSTGIS_VERSION)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Read back installed versions after updating and fail on mismatch",
    )
    return parser


def run(
    session: EngineSession,
    extra_databases: list[str],
    target_version: str | None = None,
    check: bool = False,
) -> bool:
    """Update every target database; return False when a check fails."""
    primary = get_primary_database()
    raw_version = target_version or get_target_version()
    version = update(session, primary, raw_version, extra_databases, logger=logger)
    if not check:
        return True

    stale = [
        status
        for status in verify(
            session, target_databases(TEMPLATE_DATABASE, primary, extra_databases)
        )
        if not status.is_current(version)
    ]
    for status in stale:
        logger.warning(f"Not at target version: {status}")
    return not stale


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for the update path."""
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        with EngineSession() as session:
            ok = run(
                session,
                args.databases,
                target_version=args.target_version,
                check=args.check,
            )
    except PostgisInitError as exc:
        logger.error(str(exc))
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
