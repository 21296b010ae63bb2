"""
Pytest configuration and fixtures for My Little Cook tests.
"""

import os
import uuid
from collections import defaultdict
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing littlecook modules
os.environ["LITTLECOOK_ENV"] = "development"
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

from littlecook.web.app import create_app


# ---------------------------------------------------------------------------
# In-memory Supabase stand-in
# ---------------------------------------------------------------------------


UNIQUE_KEYS = {
    "users": "id",
    "user_settings": "user_id",
    "default_slot_settings": "owner_id,day_of_week,meal_type",
}

COMPARATORS = {
    "eq": lambda a, b: a == b,
    "in": lambda a, b: a in b,
    "gte": lambda a, b: a is not None and a >= b,
    "lte": lambda a, b: a is not None and a <= b,
}


class FakeQuery:
    """Chainable query builder mirroring the subset of postgrest we use."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: dict | list | None = None
        self.filters: list[tuple[str, str, object]] = []
        self.on_conflict = ""
        self.ignore_duplicates = False
        self.row_limit: int | None = None

    def select(self, *columns):
        self.op = "select"
        return self

    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def gte(self, column, value):
        self.filters.append(("gte", column, value))
        return self

    def lte(self, column, value):
        self.filters.append(("lte", column, value))
        return self

    def limit(self, n):
        self.row_limit = n
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def insert(self, data):
        self.op = "insert"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def upsert(self, data, on_conflict="", ignore_duplicates=False):
        self.op = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        self.ignore_duplicates = ignore_duplicates
        return self

    def _matches(self, row):
        return all(COMPARATORS[op](row.get(col), val) for op, col, val in self.filters)

    def _record(self):
        payload = self.payload
        if isinstance(payload, list):
            payload = [dict(p) for p in payload]
        elif payload is not None:
            payload = dict(payload)
        self.db.writes.append((self.op, self.table, payload))

    def execute(self):
        if self.db.error is not None:
            raise self.db.error

        rows = self.db.tables[self.table]

        if self.op == "select":
            found = [dict(r) for r in rows if self._matches(r)]
            if self.row_limit is not None:
                found = found[: self.row_limit]
            return SimpleNamespace(data=found)

        self._record()

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        if self.op == "delete":
            deleted = [dict(r) for r in rows if self._matches(r)]
            rows[:] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=deleted)

        if self.op == "insert":
            created = []
            for payload in self.payload:
                row = {"id": str(uuid.uuid4()), **payload}
                rows.append(row)
                created.append(dict(row))
            return SimpleNamespace(data=created)

        keys = (self.on_conflict or UNIQUE_KEYS[self.table]).split(",")
        for row in rows:
            if all(row.get(k) == self.payload[k] for k in keys):
                if self.ignore_duplicates:
                    self.db.ignored_inserts += 1
                    return SimpleNamespace(data=[])
                row.update(self.payload)
                return SimpleNamespace(data=[dict(row)])

        row = {"id": str(uuid.uuid4()), **self.payload}
        rows.append(row)
        return SimpleNamespace(data=[dict(row)])


class FakeAuth:
    """Supabase Auth stand-in: known tokens map to users."""

    def __init__(self):
        self.tokens: dict[str, SimpleNamespace] = {}

    def get_user(self, token):
        if token not in self.tokens:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.tokens[token])


class FakeSupabase:
    """Tables as lists of dicts, unique keys enforced on upsert."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.auth = FakeAuth()
        self.writes: list[tuple] = []
        self.ignored_inserts = 0
        self.error: Exception | None = None

    def table(self, name):
        return FakeQuery(self, name)

    def add_user(
        self,
        token: str,
        user_id: str,
        email: str | None = None,
        onboarded: bool = True,
        **extra,
    ) -> dict:
        """Register a signed-in user with a users row."""
        self.auth.tokens[token] = SimpleNamespace(id=user_id, email=email)
        row = {
            "id": user_id,
            "email": email,
            "has_completed_onboarding": onboarded,
            **extra,
        }
        self.tables["users"].append(row)
        return row

    def add_meal_user(self, owner_id: str, pseudo: str) -> dict:
        """Household profile owned by owner_id."""
        row = {"id": f"{pseudo.lower()}-profile", "owner_id": owner_id, "pseudo": pseudo}
        self.tables["meal_users"].append(row)
        return row


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


ALICE_ID = "00000000-0000-0000-0000-000000000002"
BOB_ID = "00000000-0000-0000-0000-000000000003"


@pytest.fixture
def fake_db():
    """Empty in-memory database."""
    return FakeSupabase()


@pytest.fixture
def client(fake_db):
    """TestClient bound to an app using fake_db."""
    app = create_app(db_factory=lambda: fake_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice(fake_db):
    """Onboarded user, authenticated with token "alice-token"."""
    return fake_db.add_user("alice-token", ALICE_ID, email="alice@example.com", onboarded=True)


@pytest.fixture
def bob(fake_db):
    """User who has not finished onboarding, token "bob-token"."""
    return fake_db.add_user("bob-token", BOB_ID, email="bob@example.com", onboarded=False)


@pytest.fixture
def household(fake_db, alice):
    """Alice's two household profiles, plus one profile owned by another account."""
    return {
        "alice": fake_db.add_meal_user(ALICE_ID, "Alice"),
        "leo": fake_db.add_meal_user(ALICE_ID, "Leo"),
        "other": fake_db.add_meal_user(BOB_ID, "Other"),
    }
