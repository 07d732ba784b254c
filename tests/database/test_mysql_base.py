from __future__ import annotations

from datetime import timedelta

import pytest

from src.shift_attendance.shift_attendance.database.mysql_base import db_cursor, time_to_hhmm


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_kwargs = None
        self.cur = FakeCursor()
        self.events = []

    def cursor(self, **kwargs):
        self.cursor_kwargs = kwargs
        return self.cur

    def commit(self):
        self.events.append("commit")

    def rollback(self):
        self.events.append("rollback")

    def close(self):
        self.events.append("close")


class FakeFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_db_cursor_uses_dictionary_rows_and_commits():
    factory = FakeFactory()

    with db_cursor(factory) as (conn, cur):
        assert cur is factory.conn.cur

    assert factory.conn.cursor_kwargs == {"dictionary": True}
    assert factory.conn.events == ["commit", "close"]
    assert cur.closed


def test_db_cursor_rolls_back_on_error():
    factory = FakeFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("boom")

    assert factory.conn.events == ["rollback", "close"]


def test_time_to_hhmm_folds_past_midnight():
    assert time_to_hhmm(timedelta(hours=26, minutes=5)) == "02:05"
    assert time_to_hhmm("9:30:00") == "09:30"
    assert time_to_hhmm(None) is None
