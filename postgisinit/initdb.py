"""First-boot hook: run once by the image entrypoint on a fresh data directory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from .config import (
    configure_logging,
    get_extra_databases,
    get_primary_database,
    get_target_version,
)
from .db import EngineSession
from .exceptions import PostgisInitError
from .provision import install

load_dotenv()

logger = logging.getLogger(__name__)


def run(session: EngineSession) -> str | None:
    """Create the template database and install PostGIS into every target."""
    return install(
        session,
        get_primary_database(),
        get_target_version(),
        get_extra_databases(),
        logger=logger,
    )


def main() -> int:
    """CLI entrypoint for the install hook."""
    configure_logging()
    try:
        with EngineSession() as session:
            version = run(session)
    except PostgisInitError as exc:
        logger.error(str(exc))
        return 1
    logger.info(f"PostGIS {version or 'default version'} installed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
