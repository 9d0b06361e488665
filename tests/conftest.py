import pytest

ENV_VARS = (
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
    "POSTGIS_VERSION",
    "POSTGIS_EXTRA_DATABASES",
    "POSTGIS_VERSION_FILE",
    "PGUSER",
    "PGPASSWORD",
    "PGHOST",
    "PGPORT",
)


class DummyCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, query, params=None):
        self.conn.engine.record(self.conn.dbname, query, params)

    def fetchone(self):
        rows = self.conn.engine.rows
        return rows.pop(0) if rows else None

    def fetchall(self):
        rows = self.conn.engine.all_rows
        return rows.pop(0) if rows else []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class DummyConn:
    def __init__(self, engine, dbname):
        self.engine = engine
        self.dbname = dbname
        self.closed = False

    def cursor(self):
        return DummyCursor(self)

    def close(self):
        self.closed = True


class DummyEngine:
    """Records statements per database; raises configured errors on execute."""

    def __init__(self, fail_on=None, rows=None, all_rows=None):
        self.fail_on = dict(fail_on or {})
        self.rows = list(rows or [])
        self.all_rows = list(all_rows or [])
        self.connects = []
        self.connections = []
        self.executed = []
        self.events = []

    def connect(self, dbname):
        self.connects.append(dbname)
        self.events.append(("connect", dbname))
        conn = DummyConn(self, dbname)
        self.connections.append(conn)
        return conn

    def record(self, dbname, query, params):
        exc = self.fail_on.get(dbname)
        if exc is not None:
            raise exc
        self.executed.append((dbname, query, params))
        self.events.append(("execute", dbname, query))

    def databases(self):
        return [dbname for dbname, _, _ in self.executed]

    def queries_for(self, dbname):
        return [query for name, query, _ in self.executed if name == dbname]


class DummyLogger:
    def __init__(self):
        self.messages = []

    def info(self, msg):
        self.messages.append(msg)

    def warning(self, msg):
        self.messages.append(msg)

    def error(self, msg):
        self.messages.append(msg)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine():
    return DummyEngine()


@pytest.fixture
def dummy_logger():
    return DummyLogger()


@pytest.fixture
def make_engine():
    return DummyEngine
