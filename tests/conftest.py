"""
Shared pytest fixtures for MindTrace tests.

Provides an in-memory stand-in for the Supabase table client so the
repositories, services and routes run without a hosted project.
"""

import copy
import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from app.infra.supabase.repositories import RepositoryFactory
from app.services.thought_service import ThoughtService
from app.services.thought_store import ThoughtStore

USER_ID = "user-1"
OTHER_USER_ID = "user-2"
BASE_TIME = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fake Supabase client
# ---------------------------------------------------------------------------

class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data
        self.count = len(data)


class FakeQuery:
    """Chainable query mirroring the subset of postgrest-py we use."""

    def __init__(self, client: "FakeSupabaseClient", table: str):
        self._client = client
        self._table = table
        self._op = "select"
        self._columns = "*"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: List = []
        self._orders: List = []
        self._limit: Optional[int] = None

    def select(self, columns: str = "*", count: Optional[str] = None):
        self._op = "select"
        self._columns = columns
        return self

    def insert(self, payload: Dict[str, Any]):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload: Dict[str, Any]):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def lt(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) is not None and row[column] < value)
        return self

    def in_(self, column: str, values: List[Any]):
        allowed = set(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column: str, desc: bool = False):
        self._orders.append((column, desc))
        return self

    def limit(self, size: int):
        self._limit = size
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(f(row) for f in self._filters)

    def _project(self, row: Dict[str, Any]) -> Dict[str, Any]:
        if self._columns.strip() == "*":
            return copy.deepcopy(row)
        columns = [c.strip() for c in self._columns.split(",")]
        return {c: row.get(c) for c in columns}

    def execute(self) -> FakeResponse:
        self._client.calls.append((self._table, self._op))
        failure = self._client.failures.get((self._table, self._op))
        if failure is not None:
            raise failure

        rows = self._client.tables.setdefault(self._table, [])

        if self._op == "insert":
            row = self._client.new_row(self._payload)
            rows.append(row)
            return FakeResponse([copy.deepcopy(row)])

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return FakeResponse([copy.deepcopy(row) for row in matched])

        if self._op == "delete":
            self._client.tables[self._table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([copy.deepcopy(row) for row in matched])

        # Stable sorts applied last key first give multi-column ordering
        for column, desc in reversed(self._orders):
            matched.sort(key=lambda row: row[column], reverse=desc)
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResponse([self._project(row) for row in matched])


class FakeSupabaseClient:
    """Holds table rows in memory; server-assigned fields are deterministic."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict = {}
        self.calls: List = []
        self._ids = itertools.count(1)
        self._clock = itertools.count(1)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, error: Optional[Exception] = None):
        self.failures[(table, op)] = error or RuntimeError(f"simulated {op} failure on {table}")

    def new_row(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        now = (BASE_TIME + timedelta(days=365, seconds=next(self._clock))).isoformat()
        row = {"id": f"new-{next(self._ids)}", "created_at": now, "updated_at": now}
        row.update(copy.deepcopy(payload))
        if "hidden" not in row and "content" in row:
            row["hidden"] = False
        return row

    def seed(self, table: str, rows: List[Dict[str, Any]]):
        self.tables.setdefault(table, []).extend(copy.deepcopy(rows))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_row(id: str, date: str, minute: int = 0, user_id: str = USER_ID,
             content: Optional[str] = None, hidden: bool = False) -> Dict[str, Any]:
    """A thoughts row created `minute` minutes after 08:00 on its date."""
    created = datetime.fromisoformat(f"{date}T08:00:00+00:00") + timedelta(minutes=minute)
    return {
        "id": id,
        "user_id": user_id,
        "date": date,
        "content": content or f"thought {id}",
        "hidden": hidden,
        "created_at": created.isoformat(),
        "updated_at": created.isoformat(),
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_client():
    return FakeSupabaseClient()


@pytest.fixture
def repositories(fake_client):
    return RepositoryFactory(fake_client)


@pytest.fixture
def thought_service(repositories):
    return ThoughtService(repositories, days_per_load=2, date_probe_limit=100)


@pytest.fixture
def store(thought_service):
    return ThoughtStore(thought_service, USER_ID)


@pytest.fixture
def scenario_rows():
    """Three thoughts on 2024-01-02 (T1<T2<T3) and one on 2024-01-01."""
    return [
        make_row("a1", "2024-01-02", minute=1),
        make_row("a2", "2024-01-02", minute=2),
        make_row("a3", "2024-01-02", minute=3),
        make_row("b1", "2024-01-01", minute=1),
    ]
