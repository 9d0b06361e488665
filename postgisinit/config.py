"""Environment-driven settings for the PostGIS init and update hooks."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable

EXTENSION_NAME = "postgis"
TEMPLATE_DATABASE = "template_postgis"
MAINTENANCE_DATABASE = "postgres"
DEFAULT_ADMIN_USER = "postgres"
DEFAULT_VERSION_FILE = "/_pgis_version.txt"
# Built --without-raster --without-topology; tiger geocoder files are not copied.
EXCLUDED_EXTENSIONS = ("postgis_raster", "postgis_topology", "postgis_tiger_geocoder")


def get_admin_user() -> str:
    """Return the administrative user the hooks connect as."""
    return (
        os.environ.get("POSTGRES_USER")
        or os.environ.get("PGUSER")
        or DEFAULT_ADMIN_USER
    )


def get_primary_database() -> str:
    """Return the primary database, defaulting to the admin user name."""
    return os.environ.get("POSTGRES_DB") or get_admin_user()


def get_target_version() -> str | None:
    """Return the raw PostGIS version from the environment, if any."""
    return os.environ.get("POSTGIS_VERSION") or None


def get_version_file() -> str:
    return os.environ.get("POSTGIS_VERSION_FILE", DEFAULT_VERSION_FILE)


def parse_database_list(raw: str | None) -> list[str]:
    """Split a comma or whitespace separated list of database names."""
    if not raw:
        return []
    return [item for item in re.split(r"[,\s]+", raw) if item]


def get_extra_databases() -> list[str]:
    return parse_database_list(os.environ.get("POSTGIS_EXTRA_DATABASES"))


def target_databases(
    template: str, primary: str, extras: Iterable[str] = ()
) -> list[str]:
    """Return the ordered provisioning targets.

    The template and primary databases always come first; extras follow in
    the order given. Duplicates are kept since provisioning is idempotent.
    """
    return [template, primary, *extras]


def configure_logging() -> None:
    """Configure root logging from ``LOG_LEVEL`` for the console entry points."""
    log_level = (os.environ.get("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
