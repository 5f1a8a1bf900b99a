from __future__ import annotations

import pytest
from mysql.connector import errors

from presence_kiosk.core.exceptions import StorageError
from presence_kiosk.database.mysql_base import db_cursor


class FakeCursor:
    def __init__(self, execute_error=None):
        self._execute_error = execute_error
        self.executed = []
        self.closed = False

    def execute(self, sql, params=None):
        if self._execute_error:
            raise self._execute_error
        self.executed.append((sql, params))

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, *, execute_error=None, rollback_error=None, close_error=None):
        self.cursor_obj = FakeCursor(execute_error)
        self._rollback_error = rollback_error
        self._close_error = close_error
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self._rollback_error:
            raise self._rollback_error

    def close(self):
        self.closed = True
        if self._close_error:
            raise self._close_error


class FakeFactory:
    def __init__(self, conn=None, connect_error=None):
        self._conn = conn
        self._connect_error = connect_error

    def connect(self):
        if self._connect_error:
            raise self._connect_error
        return self._conn


def test_commits_and_closes_on_success():
    conn = FakeConnection()

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("DELETE FROM events")

    assert conn.committed and conn.closed and conn.cursor_obj.closed
    assert not conn.rolled_back


def test_driver_error_rolls_back_and_is_wrapped():
    conn = FakeConnection(execute_error=errors.ProgrammingError(msg="bad sql"))

    with pytest.raises(StorageError, match="bad sql"):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELEC 1")

    assert conn.rolled_back and conn.closed
    assert not conn.committed


def test_dropped_connection_still_raises_storage_error():
    lost = errors.OperationalError(msg="Lost connection to MySQL server")
    conn = FakeConnection(execute_error=lost, rollback_error=errors.OperationalError(msg="gone"), close_error=lost)

    with pytest.raises(StorageError, match="Lost connection"):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("INSERT INTO events VALUES (1)")

    assert conn.rolled_back and conn.closed


def test_non_driver_error_propagates_unchanged_after_rollback():
    conn = FakeConnection(rollback_error=errors.OperationalError(msg="gone"))

    with pytest.raises(KeyError):
        with db_cursor(FakeFactory(conn)):
            raise KeyError("oen")

    assert conn.rolled_back and conn.closed


def test_connect_failure_is_wrapped():
    factory = FakeFactory(connect_error=errors.InterfaceError(msg="Can't connect"))

    with pytest.raises(StorageError, match="Cannot connect"):
        with db_cursor(factory):
            pass
