import pytest
import psycopg2

from config import AuthConfig, DatabaseConfig
from db.access import DataAccess
from db.connection import DirectConnector


class FakeCursor:
    def __init__(self, server):
        self.server = server
        self.description = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params):
        self.server.executed.append((query, list(params)))
        if self.server.execute_error is not None:
            raise self.server.execute_error
        self.description = self.server.description

    def fetchall(self):
        return list(self.server.rows)


class FakeConnection:
    def __init__(self, server):
        self.server = server
        self.closed = 0
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self.server)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = 1


class FakeServer:
    """Stands in for psycopg2.connect and records what each call did."""

    def __init__(self):
        self.connections = []
        self.connect_kwargs = []
        self.executed = []
        self.rows = []
        self.description = []
        self.connect_error = None
        self.execute_error = None

    def connect(self, **kwargs):
        self.connect_kwargs.append(kwargs)
        if self.connect_error is not None:
            raise self.connect_error
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn

    def returns(self, columns, rows):
        self.description = [(name, None, None, None, None, None, None) for name in columns]
        self.rows = rows


@pytest.fixture()
def db_config():
    return DatabaseConfig(user="tester", database="recruiters_test", password="secret",
                          hostname="db.local", port=5433)


@pytest.fixture()
def fake_server(monkeypatch):
    server = FakeServer()
    monkeypatch.setattr(psycopg2, "connect", server.connect)
    return server


@pytest.fixture()
def access(db_config, fake_server):
    return DataAccess(db_config, DirectConnector(db_config))


class InMemoryAccess:
    """Implements the DataAccess verbs over plain lists of dicts."""

    def __init__(self):
        self.tables = {"recruiters": [], "users": []}
        self.init_calls = 0
        self.fail_with = None

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(record, conditions):
        return all(record.get(k) == v for k, v in (conditions or {}).items())

    def init(self):
        self._check()
        self.init_calls += 1

    def find_all(self, table, conditions=None, options=None):
        self._check()
        options = options or {}
        found = [dict(r) for r in self.tables[table] if self._matches(r, conditions)]
        if options.get("fields"):
            found = [{k: r.get(k) for k in options["fields"]} for r in found]
        if options.get("limit"):
            found = found[:int(options["limit"])]
        return found

    def find_one(self, table, conditions=None, options=None):
        found = self.find_all(table, conditions, {**(options or {}), "limit": 1})
        return found[0] if found else None

    def create(self, table, data):
        self._check()
        self.tables[table].append(dict(data))

    def update(self, table, conditions, data):
        self._check()
        for record in self.tables[table]:
            if self._matches(record, conditions):
                record.update(data)

    def destroy(self, table, conditions):
        self._check()
        self.tables[table] = [r for r in self.tables[table] if not self._matches(r, conditions)]

    def close(self):
        pass


@pytest.fixture()
def memory_access():
    return InMemoryAccess()


@pytest.fixture()
def auth_config():
    return AuthConfig(jwt_key="test-signing-key-with-enough-length-for-hs256",
                      token_ttl_seconds=3600, bcrypt_rounds=4,
                      login_max_attempts=3, login_window_seconds=60)
