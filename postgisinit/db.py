from __future__ import annotations

import os
from typing import Any, Callable

import psycopg

from .config import get_admin_user

Connector = Callable[[str], psycopg.Connection]


def _get_pg_config(dbname: str) -> dict[str, str | int]:
    """Return connection settings for ``dbname`` from the environment.

    Host and port are omitted when unset so libpq falls back to the local
    socket, which is all the entrypoint's temporary server listens on.
    """
    cfg: dict[str, str | int] = {
        "user": get_admin_user(),
        "dbname": dbname,
    }
    host = os.environ.get("PGHOST")
    if host:
        cfg["host"] = host
    port = os.environ.get("PGPORT")
    if port:
        cfg["port"] = int(port)
    password = os.environ.get("PGPASSWORD") or os.environ.get("POSTGRES_PASSWORD")
    if password:
        cfg["password"] = password
    return cfg


def get_connection(dbname: str) -> psycopg.Connection:
    """Open an autocommit administrative connection to ``dbname``."""
    return psycopg.connect(**_get_pg_config(dbname), autocommit=True)


class EngineSession:
    """Administrative session that moves between databases on one engine.

    Holds at most one open connection. ``connect`` closes the current
    connection before opening the next, like ``psql \\c``.
    """

    def __init__(self, connector: Connector = get_connection) -> None:
        self._connector = connector
        self.conn: psycopg.Connection | None = None
        self.dbname: str | None = None

    def connect(self, dbname: str) -> psycopg.Connection:
        self.close()
        self.conn = self._connector(dbname)
        self.dbname = dbname
        return self.conn

    def reconnect(self) -> psycopg.Connection:
        """Reopen the connection to the current database."""
        if self.dbname is None:
            raise RuntimeError("Session is not connected to a database.")
        return self.connect(self.dbname)

    def _require_conn(self) -> psycopg.Connection:
        if self.conn is None:
            raise RuntimeError("Session is not connected to a database.")
        return self.conn

    def execute(self, query: Any, params: Any = None) -> None:
        with self._require_conn().cursor() as cur:
            cur.execute(query, params)

    def fetchone(self, query: Any, params: Any = None) -> tuple | None:
        with self._require_conn().cursor() as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetchall(self, query: Any, params: Any = None) -> list[tuple]:
        with self._require_conn().cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
        self.conn = None

    def __enter__(self) -> EngineSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
