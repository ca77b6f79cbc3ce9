import threading

import psycopg2
import pytest
from psycopg2 import extensions, pool

from db.access import DataAccess
from db.connection import DirectConnector, PooledConnector, make_connector
from db.errors import DatabaseConnectionError, MappingError, QueryError
from db.init_db import SCHEMA_SQL


def test_find_all_maps_every_row(access, fake_server):
    fake_server.returns(["id", "name"], [("r1", "Ann"), ("r2", "Bo")])

    records = access.find_all("recruiters", {"city": "Oslo"})

    assert records == [{"id": "r1", "name": "Ann"}, {"id": "r2", "name": "Bo"}]
    assert fake_server.executed == [('SELECT * FROM recruiters WHERE "city" = %s;', ["Oslo"])]


def test_find_all_empty_result(access, fake_server):
    fake_server.returns(["id"], [])
    assert access.find_all("recruiters") == []


def test_find_one_returns_first_record(access, fake_server):
    fake_server.returns(["id", "email"], [("u1", "a@b.co")])
    assert access.find_one("users", {"email": "a@b.co"}) == {"id": "u1", "email": "a@b.co"}


def test_find_one_without_match_returns_none(access, fake_server):
    fake_server.returns(["id"], [])
    assert access.find_one("recruiters", {}) is None


def test_find_one_matches_find_all_with_limit_one(access, fake_server):
    fake_server.returns(["id"], [])
    access.find_one("users", {"email": "a@b.co"}, {"fields": ["id"]})
    access.find_all("users", {"email": "a@b.co"}, {"fields": ["id"], "limit": 1})

    one, many = fake_server.executed
    assert one == many
    assert one == ("SELECT 'id' FROM users WHERE \"email\" = %s LIMIT %s;", ["a@b.co", "1"])


def test_each_call_uses_its_own_connection(access, fake_server):
    fake_server.returns(["id"], [("r1",)])
    access.find_all("recruiters")
    access.create("recruiters", {"id": "r2"})

    assert len(fake_server.connections) == 2
    assert all(conn.closed for conn in fake_server.connections)
    assert [conn.commits for conn in fake_server.connections] == [1, 1]


def test_create_update_destroy_bind_params(access, fake_server):
    access.create("recruiters", {"id": "r1", "name": "Ann"})
    access.update("recruiters", {"id": "r1"}, {"name": "Anna"})
    access.destroy("recruiters", {"id": "r1"})

    assert fake_server.executed == [
        ("INSERT INTO recruiters (id, name) VALUES (%s, %s);", ["r1", "Ann"]),
        ('UPDATE recruiters SET name=%s WHERE "id"=%s;', ["Anna", "r1"]),
        ('DELETE FROM recruiters WHERE "id" = %s;', ["r1"]),
    ]


def test_init_is_repeatable(access, fake_server):
    access.init()
    access.init()
    assert [sql for sql, _ in fake_server.executed] == [SCHEMA_SQL, SCHEMA_SQL]
    assert "CREATE TABLE IF NOT EXISTS recruiters" in SCHEMA_SQL


def test_connect_failure_raises_connection_error(access, fake_server):
    fake_server.connect_error = psycopg2.OperationalError("could not connect to server")
    with pytest.raises(DatabaseConnectionError, match="could not connect"):
        access.find_all("recruiters")


def test_statement_failure_raises_query_error_and_closes(access, fake_server):
    fake_server.execute_error = psycopg2.ProgrammingError('relation "nope" does not exist')

    with pytest.raises(QueryError, match='relation "nope" does not exist') as info:
        access.find_all("nope")

    assert isinstance(info.value.__cause__, psycopg2.ProgrammingError)
    conn = fake_server.connections[0]
    assert conn.rollbacks == 1
    assert conn.commits == 0
    assert conn.closed


def test_lost_connection_during_statement(access, fake_server):
    fake_server.execute_error = psycopg2.OperationalError("server closed the connection")
    with pytest.raises(DatabaseConnectionError):
        access.destroy("recruiters", {"id": "r1"})
    assert fake_server.connections[0].closed


def test_statement_timeout_is_a_query_error(access, fake_server):
    fake_server.execute_error = extensions.QueryCanceledError("canceling statement due to statement timeout")
    with pytest.raises(QueryError, match="statement timeout"):
        access.find_all("recruiters")


def test_mapping_error_still_closes_connection(access, fake_server):
    fake_server.returns(["id", "name"], [("r1",)])
    with pytest.raises(MappingError):
        access.find_all("recruiters")
    assert fake_server.connections[0].closed


def test_connect_kwargs_carry_deadlines(access, fake_server, db_config):
    fake_server.returns(["id"], [])
    access.find_all("recruiters")
    assert fake_server.connect_kwargs == [{
        "user": "tester",
        "dbname": "recruiters_test",
        "password": "secret",
        "host": "db.local",
        "port": 5433,
        "connect_timeout": 10,
        "options": "-c statement_timeout=30000",
    }]


class FakePool:
    def __init__(self, minconn, maxconn, **kwargs):
        self.sizes = (minconn, maxconn)
        self.kwargs = kwargs
        self.borrowed = 0
        self.returned = []
        self.closed_all = False

    def getconn(self):
        self.borrowed += 1
        return self.conn

    def putconn(self, conn, close=False):
        self.returned.append((conn, close))

    def closeall(self):
        self.closed_all = True


def test_pooled_connector_returns_connection_after_each_statement(monkeypatch, db_config, fake_server):
    from dataclasses import replace

    monkeypatch.setattr(pool, "ThreadedConnectionPool", FakePool)
    config = replace(db_config, pool_max=4)

    connector = make_connector(config)
    assert isinstance(connector, PooledConnector)
    connector._pool.conn = fake_server.connect()

    access = DataAccess(config, connector)
    fake_server.returns(["id"], [("r1",)])
    access.find_all("recruiters")
    access.update("recruiters", {"id": "r1"}, {"name": "Ann"})

    assert connector._pool.sizes == (1, 4)
    assert connector._pool.borrowed == 2
    assert [close for _, close in connector._pool.returned] == [False, False]

    access.close()
    assert connector._pool.closed_all


def test_direct_connector_is_the_default(db_config):
    assert isinstance(make_connector(db_config), DirectConnector)


def test_pooled_connector_waits_for_a_free_connection(monkeypatch, db_config, fake_server):
    from dataclasses import replace

    monkeypatch.setattr(pool, "ThreadedConnectionPool", FakePool)
    connector = PooledConnector(replace(db_config, pool_max=1))
    connector._pool.conn = fake_server.connect()
    order = []

    def second_caller():
        with connector.connection():
            order.append("second")

    with connector.connection():
        worker = threading.Thread(target=second_caller)
        worker.start()
        worker.join(timeout=0.2)
        assert worker.is_alive()
        order.append("first")

    worker.join(timeout=5)
    assert not worker.is_alive()
    assert order == ["first", "second"]
    assert connector._pool.borrowed == 2


def test_pooled_connector_gives_up_after_connect_timeout(monkeypatch, db_config, fake_server):
    from dataclasses import replace

    monkeypatch.setattr(pool, "ThreadedConnectionPool", FakePool)
    connector = PooledConnector(replace(db_config, pool_max=1, connect_timeout=1))
    connector._pool.conn = fake_server.connect()

    with connector.connection():
        with pytest.raises(DatabaseConnectionError, match="waiting for a pooled connection"):
            with connector.connection():
                pass

    with connector.connection():
        pass
    assert connector._pool.borrowed == 2
