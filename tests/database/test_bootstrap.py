from __future__ import annotations

from pathlib import Path

import hr_portal
from hr_portal.database.bootstrap import SCHEMA_PATH, apply_schema, iter_sql_statements


def test_split_ignores_semicolons_in_literals_and_comment_lines():
    sql = """
    -- leading comment; with a semicolon
    INSERT INTO t VALUES ('a;b');
    INSERT INTO t VALUES ("c");
    SELECT 1
    """
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c")',
        "SELECT 1",
    ]


class FakeCursor:
    def __init__(self, log):
        self.log = log

    def execute(self, stmt):
        self.log.append(stmt)


class FakeConnection:
    def __init__(self, log):
        self.log = log
        self.committed = False
        self.closed = False

    def cursor(self):
        return FakeCursor(self.log)

    def commit(self):
        self.committed = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self):
        self.log = []
        self.connections = []

    def connect(self, with_database=True):
        conn = FakeConnection(self.log)
        self.connections.append((with_database, conn))
        return conn


def test_apply_schema_creates_database_then_tables():
    factory = FakeFactory()
    count = apply_schema(factory, database="hr_test", schema_path=SCHEMA_PATH)

    assert count == 1
    assert factory.log[0].startswith("CREATE DATABASE IF NOT EXISTS `hr_test`")
    assert factory.log[1].startswith("CREATE TABLE IF NOT EXISTS attendance_records")
    assert not any(stmt.upper().startswith("USE ") for stmt in factory.log)
    assert [w for w, _ in factory.connections] == [False, True]
    assert all(c.committed and c.closed for _, c in factory.connections)


def test_schema_ships_inside_the_package_and_is_the_default():
    package_dir = Path(hr_portal.__file__).resolve().parent
    assert SCHEMA_PATH.is_file()
    assert package_dir in SCHEMA_PATH.parents

    factory = FakeFactory()
    assert apply_schema(factory, database="hr_test") == 1
