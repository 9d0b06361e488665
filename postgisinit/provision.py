"""
Idempotent PostGIS provisioning across several databases of one engine.

- install(): first-boot path, creates the template database then installs
- update(): maintenance path for a running engine
- verify(): read back installed versions
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from logging import Logger

import psycopg
from psycopg import sql

from .config import (
    EXTENSION_NAME,
    MAINTENANCE_DATABASE,
    TEMPLATE_DATABASE,
    target_databases,
)
from .db import EngineSession
from .exceptions import ProvisionError, TemplateDatabaseError
from .models import ExtensionStatus
from .versions import effective_version

_log = logging.getLogger(__name__)


def create_extension_sql(extension: str, version: str | None) -> sql.Composed:
    """Build ``CREATE EXTENSION IF NOT EXISTS``, pinned when a version is set."""
    if version is None:
        return sql.SQL("CREATE EXTENSION IF NOT EXISTS {}").format(
            sql.Identifier(extension)
        )
    return sql.SQL("CREATE EXTENSION IF NOT EXISTS {} VERSION {}").format(
        sql.Identifier(extension), sql.Literal(version)
    )


def update_extension_sql(extension: str, version: str | None) -> sql.Composed:
    """Build ``ALTER EXTENSION ... UPDATE``; a no-op when already current."""
    if version is None:
        return sql.SQL("ALTER EXTENSION {} UPDATE").format(sql.Identifier(extension))
    return sql.SQL("ALTER EXTENSION {} UPDATE TO {}").format(
        sql.Identifier(extension), sql.Literal(version)
    )


def create_template_sql(name: str) -> sql.Composed:
    return sql.SQL("CREATE DATABASE {} IS_TEMPLATE true").format(sql.Identifier(name))


def provision(
    session: EngineSession,
    target_version: str | None,
    databases: Sequence[str],
    *,
    extension: str = EXTENSION_NAME,
    reconnect: bool = False,
    logger: Logger | None = None,
) -> str | None:
    """Make ``extension`` present and current in each database, in order.

    Stops at the first engine error; databases before it stay provisioned,
    the rest are untouched. Re-running is safe since both statements are
    idempotent.

    Args:
        session: Administrative session on the target engine.
        target_version: Raw version; build metadata after ``+`` is dropped.
            None means the engine's default version.
        databases: Ordered database names, must not be empty.
        extension: Extension to provision.
        reconnect: Reconnect after each database so ``pg_settings.resetval``
            reflects settings added by the extension.
        logger: Logger for progress lines.

    Returns:
        The effective target version.

    Raises:
        ValueError: If no databases are given.
        ProvisionError: On the first engine failure.
    """
    logger = logger or _log
    names = list(databases)
    if not names:
        raise ValueError("At least one database name is required.")
    version = effective_version(target_version)
    label = "the default version" if version is None else version

    for dbname in names:
        logger.info(f"Updating PostGIS core extensions in '{dbname}' to {label}")
        try:
            session.connect(dbname)
            session.execute(create_extension_sql(extension, version))
            session.execute(update_extension_sql(extension, version))
            if reconnect:
                session.reconnect()
        except psycopg.Error as exc:
            raise ProvisionError(
                f"Provisioning {extension} in '{dbname}' to {label} failed: {exc}",
                database=dbname,
                version=version,
            ) from exc
    return version


def create_template_database(
    session: EngineSession,
    name: str = TEMPLATE_DATABASE,
    *,
    maintenance_database: str = MAINTENANCE_DATABASE,
    logger: Logger | None = None,
) -> None:
    """Create ``name`` flagged as a template. Assumes a fresh engine.

    Raises:
        TemplateDatabaseError: If creation fails, including when the
            database already exists.
    """
    logger = logger or _log
    logger.info(f"Creating template database '{name}'")
    try:
        session.connect(maintenance_database)
        session.execute(create_template_sql(name))
    except psycopg.Error as exc:
        raise TemplateDatabaseError(
            f"Creating template database '{name}' failed: {exc}",
            database=name,
        ) from exc


def install(
    session: EngineSession,
    primary_database: str,
    target_version: str | None = None,
    extra_databases: Iterable[str] = (),
    *,
    template: str = TEMPLATE_DATABASE,
    logger: Logger | None = None,
) -> str | None:
    """First-boot path: create the template, then install everywhere."""
    create_template_database(session, template, logger=logger)
    return provision(
        session,
        target_version,
        target_databases(template, primary_database, extra_databases),
        reconnect=True,
        logger=logger,
    )


def update(
    session: EngineSession,
    primary_database: str,
    target_version: str | None = None,
    extra_databases: Iterable[str] = (),
    *,
    template: str = TEMPLATE_DATABASE,
    logger: Logger | None = None,
) -> str | None:
    """Maintenance path: create-or-upgrade on a running engine."""
    return provision(
        session,
        target_version,
        target_databases(template, primary_database, extra_databases),
        logger=logger,
    )


def extension_status(
    session: EngineSession, dbname: str, extension: str = EXTENSION_NAME
) -> ExtensionStatus:
    """Read installed and default versions of ``extension`` in ``dbname``."""
    session.connect(dbname)
    row = session.fetchone(
        """
        SELECT
            (SELECT extversion FROM pg_extension WHERE extname = %s),
            (SELECT default_version FROM pg_available_extensions WHERE name = %s);
        """,
        (extension, extension),
    )
    installed, default = row if row else (None, None)
    return ExtensionStatus(
        database=dbname,
        extension=extension,
        installed_version=installed,
        default_version=default,
    )


def verify(
    session: EngineSession,
    databases: Sequence[str],
    *,
    extension: str = EXTENSION_NAME,
) -> list[ExtensionStatus]:
    """Return the extension status of each database, failing fast."""
    statuses: list[ExtensionStatus] = []
    for dbname in databases:
        try:
            statuses.append(extension_status(session, dbname, extension))
        except psycopg.Error as exc:
            raise ProvisionError(
                f"Reading {extension} status in '{dbname}' failed: {exc}",
                database=dbname,
            ) from exc
    return statuses
