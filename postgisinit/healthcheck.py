from __future__ import annotations

import logging

import psycopg
from dotenv import load_dotenv

from .config import (
    EXCLUDED_EXTENSIONS,
    EXTENSION_NAME,
    configure_logging,
    get_primary_database,
    get_version_file,
)
from .db import EngineSession
from .exceptions import HealthcheckError, PostgisInitError
from .marker import read_version_marker
from .provision import extension_status

load_dotenv()

logger = logging.getLogger(__name__)


def check(session: EngineSession, dbname: str, marker_path: str | None = None) -> str:
    """Probe PostGIS in ``dbname`` and return its library version.

    Raises:
        HealthcheckError: If PostGIS is missing, an excluded extension is
            available, or the installed version differs from the marker.
    """
    status = extension_status(session, dbname)
    if not status.installed:
        raise HealthcheckError(f"{EXTENSION_NAME} is not installed in '{dbname}'.")

    row = session.fetchone("SELECT postgis_lib_version();")
    lib_version = row[0] if row else None
    if not lib_version:
        raise HealthcheckError(f"postgis_lib_version() returned nothing in '{dbname}'.")

    rows = session.fetchall(
        "SELECT name FROM pg_available_extensions WHERE name = ANY(%s);",
        (list(EXCLUDED_EXTENSIONS),),
    )
    unexpected = sorted(name for (name,) in rows)
    if unexpected:
        raise HealthcheckError(f"Unexpected extensions available: {', '.join(unexpected)}")

    expected = read_version_marker(marker_path) if marker_path else None
    if expected and status.installed_version != expected:
        raise HealthcheckError(
            f"{EXTENSION_NAME} {status.installed_version} in '{dbname}' "
            f"does not match image version {expected}."
        )
    return lib_version


def main() -> int:
    configure_logging()
    try:
        with EngineSession() as session:
            check(session, get_primary_database(), get_version_file())
    except (PostgisInitError, psycopg.Error) as exc:
        logger.error(str(exc))
        return 1
    print("OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
