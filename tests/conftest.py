import itertools
from types import SimpleNamespace

import pytest


class FakeQuery:
    """Minimal stand-in for the supabase-py query builder."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.operation = "select"
        self.payload = None
        self.filters: list[tuple[str, object]] = []
        self.ordering: tuple[str, bool] | None = None
        self.row_limit: int | None = None

    def select(self, columns: str = "*", count: str | None = None) -> "FakeQuery":
        self.operation = "select"
        return self

    def insert(self, payload) -> "FakeQuery":
        self.operation = "insert"
        self.payload = payload
        return self

    def update(self, payload) -> "FakeQuery":
        self.operation = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.operation = "delete"
        return self

    def eq(self, column: str, value) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.ordering = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self.row_limit = count
        return self

    def execute(self) -> SimpleNamespace:
        if self.table in self.client.failing_tables and self.operation != "select":
            raise RuntimeError(f"{self.table} write rejected")

        rows = self.client.tables.setdefault(self.table, [])
        if self.operation == "insert":
            batch = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for record in batch:
                stamp = next(self.client.counter)
                row = {"id": f"{self.table}-{stamp}", "created_at": stamp, **record}
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted, count=None)

        matched = [row for row in rows if all(row.get(column) == value for column, value in self.filters)]
        if self.operation == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)
        if self.operation == "delete":
            self.client.tables[self.table] = [row for row in rows if row not in matched]
            return SimpleNamespace(data=[dict(row) for row in matched], count=None)

        if self.ordering:
            column, desc = self.ordering
            matched = sorted(matched, key=lambda row: row.get(column), reverse=desc)
        total = len(matched)
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return SimpleNamespace(data=[dict(row) for row in matched], count=total)


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.failing_tables: set[str] = set()
        self.counter = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def seed(self, table: str, *rows: dict) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)


@pytest.fixture
def fake_supabase(monkeypatch: pytest.MonkeyPatch) -> FakeSupabase:
    from src.fleetroute.db import supabase as supabase_module
    from src.fleetroute.persistence import database

    client = FakeSupabase()
    monkeypatch.setattr(database, "get_supabase_client", lambda: client)
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: client)
    return client


@pytest.fixture
def no_supabase(monkeypatch: pytest.MonkeyPatch) -> None:
    from src.fleetroute.db import supabase as supabase_module
    from src.fleetroute.persistence import database

    monkeypatch.setattr(database, "get_supabase_client", lambda: None)
    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: None)
