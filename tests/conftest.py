import itertools
from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError

from canvas_store import CanvasStore


class FakeQuery:
    """Nachbau des Supabase-Query-Builders für genau die genutzten Aufrufe."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = None
        self.payload = None
        self.filters = {}

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def select(self, columns):
        self.op, self.payload = "select", columns
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def execute(self):
        self.client.calls.append((self.op, self.table, self.payload, dict(self.filters)))
        if self.client.fail_on == self.op:
            raise APIError({"message": "boom", "code": "XX000"})
        rows = self.client.rows
        if self.op == "insert":
            new_id = self.client.next_id()
            rows[new_id] = {"id": new_id, "ket": self.payload.get("ket")}
            return SimpleNamespace(data=[dict(rows[new_id])])
        row = rows.get(self.filters.get("id"))
        if self.op == "select":
            return SimpleNamespace(data=[{"ket": row["ket"]}] if row else [])
        if self.op == "update":
            if row is None:
                return SimpleNamespace(data=[])
            row.update(self.payload)
            return SimpleNamespace(data=[dict(row)])
        raise AssertionError(f"unerwartete Operation {self.op}")


class FakeClient:
    def __init__(self):
        self.rows = {}
        self.calls = []
        self.fail_on = None
        self._ids = itertools.count(1)

    def next_id(self):
        return f"00000000-0000-0000-0000-{next(self._ids):012d}"

    def table(self, name):
        return FakeQuery(self, name)

    def calls_of(self, op):
        return [call for call in self.calls if call[0] == op]


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def store(client):
    return CanvasStore(client)


class Recorder:
    """Sammelt Aufrufe von navigate/notify/clipboard."""

    def __init__(self):
        self.navigated = []
        self.messages = []
        self.copied = []

    def navigate(self, canvas_id):
        self.navigated.append(canvas_id)

    def notify(self, level, text):
        self.messages.append((level, text))

    def clipboard(self, text):
        self.copied.append(text)


@pytest.fixture
def recorder():
    return Recorder()
