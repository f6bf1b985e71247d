"""
In-memory stand-in for the supabase-py client.

Implements the PostgREST builder subset the services use (select, insert,
update, delete with eq/in_ filters, order, limit), auth.get_user, and rpc
with registered Python handlers that run against a snapshot so a failing
handler leaves the tables untouched, like a Postgres function would.
Deletes follow the "on delete cascade" foreign keys in CASCADES.
"""

import copy
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

# parent table -> (child table, foreign key) pairs declared "on delete cascade"
CASCADES = {
    "teams": [
        ("team_members", "team_id"), ("team_invites", "team_id"), ("personnel", "team_id"),
        ("equipment", "team_id"), ("locations", "team_id"), ("props", "team_id"),
        ("costume_progress", "team_id"), ("shoots", "team_id"),
    ],
    "shoots": [
        ("shoot_references", "shoot_id"), ("shoot_participants", "shoot_id"),
        ("shoot_equipment", "shoot_id"), ("shoot_props", "shoot_id"), ("shoot_costumes", "shoot_id"),
    ],
}


class FakeDatabaseError(Exception):
    pass


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self._op = "select"
        self._payload: Any = None
        self._filters: List[Callable[[Dict[str, Any]], bool]] = []
        self._order: List[tuple] = []
        self._limit: Optional[int] = None

    def select(self, *columns, **kwargs):
        self._op = "select"
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = payload
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order.append((column, desc))
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matches(self, row):
        return all(f(row) for f in self._filters)

    def execute(self):
        self.db.check_failure(self.table_name, self._op)
        rows = self.db.tables[self.table_name]

        if self._op == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            created = [self.db.add_row(self.table_name, item) for item in payload]
            return SimpleNamespace(data=copy.deepcopy(created), count=len(created))

        matched = [row for row in rows if self._matches(row)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return SimpleNamespace(data=copy.deepcopy(matched), count=len(matched))

        if self._op == "delete":
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            self.db.cascade(self.table_name, [row["id"] for row in matched])
            return SimpleNamespace(data=copy.deepcopy(matched), count=len(matched))

        for column, desc in reversed(self._order):
            matched.sort(key=lambda row: (row.get(column) is None, row.get(column) or ""), reverse=desc)
        if self._limit is not None:
            matched = matched[:self._limit]
        return SimpleNamespace(data=copy.deepcopy(matched), count=len(matched))


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: Dict[str, Any]):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.rpc_calls.append((self.name, copy.deepcopy(self.params)))
        handler = self.db.rpc_handlers.get(self.name)
        if handler is None:
            raise FakeDatabaseError(f"function {self.name} does not exist")
        snapshot = copy.deepcopy(self.db.tables)
        try:
            data = handler(self.db, **self.params)
        except Exception:
            self.db.tables = snapshot
            raise
        return SimpleNamespace(data=data)


class FakeAuth:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def get_user(self, jwt=None):
        user = self.db.users.get(jwt)
        if user is None:
            raise FakeDatabaseError("invalid JWT")
        return SimpleNamespace(user=SimpleNamespace(
            id=user["id"],
            email=user.get("email"),
            user_metadata=user.get("user_metadata", {}),
            app_metadata={},
        ))


def replace_shoot_associations(db, p_shoot_id, p_equipment=None, p_props=None, p_costumes=None, p_participants=None):
    """Python twin of app/database/sql/replace_shoot_associations.sql"""
    if not any(row["id"] == p_shoot_id for row in db.tables["shoots"]):
        raise FakeDatabaseError(f"shoot {p_shoot_id} not found")

    for table in ("shoot_equipment", "shoot_props", "shoot_costumes"):
        db.table(table).delete().eq("shoot_id", p_shoot_id).execute()
    for item in p_equipment or []:
        db.table("shoot_equipment").insert({
            "shoot_id": p_shoot_id,
            "equipment_id": item["equipment_id"],
            "quantity": item.get("quantity") or 1,
        }).execute()
    for item in p_props or []:
        db.table("shoot_props").insert({"shoot_id": p_shoot_id, "prop_id": item["prop_id"]}).execute()
    for item in p_costumes or []:
        db.table("shoot_costumes").insert({"shoot_id": p_shoot_id, "costume_id": item["costume_id"]}).execute()

    db.table("shoot_participants").delete().eq("shoot_id", p_shoot_id).execute()
    for item in p_participants or []:
        db.table("shoot_participants").insert({
            "shoot_id": p_shoot_id,
            "personnel_id": item.get("personnel_id") or None,
            "name": item["name"],
            "role": item["role"],
            "email": item.get("email") or None,
        }).execute()
    return None


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.users: Dict[str, Dict[str, Any]] = {}
        self.auth = FakeAuth(self)
        self.rpc_handlers: Dict[str, Callable] = {
            "replace_shoot_associations": replace_shoot_associations,
        }
        self.rpc_calls: List[tuple] = []
        self.failures = set()
        self._clock = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> FakeRpc:
        return FakeRpc(self, name, params or {})

    def fail_on(self, table: str, op: str) -> None:
        self.failures.add((table, op))

    def check_failure(self, table: str, op: str) -> None:
        if (table, op) in self.failures:
            raise FakeDatabaseError(f"{op} on {table} failed")

    def cascade(self, table: str, ids: List[str]) -> None:
        for child, column in CASCADES.get(table, []):
            if ids:
                self.table(child).delete().in_(column, ids).execute()

    def add_row(self, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
        self._clock += 1
        row = {
            "id": str(uuid.uuid4()),
            "created_at": (BASE_TIME + timedelta(seconds=self._clock)).isoformat(),
        }
        row.update(copy.deepcopy(values))
        self.tables[table].append(row)
        return row

    # Test helpers

    def seed(self, table: str, **values) -> Dict[str, Any]:
        return copy.deepcopy(self.add_row(table, values))

    def rows(self, table: str, **filters) -> List[Dict[str, Any]]:
        return [
            copy.deepcopy(row) for row in self.tables[table]
            if all(row.get(k) == v for k, v in filters.items())
        ]

    def add_user(self, token: str, user_id: str, email: Optional[str] = None) -> None:
        self.users[token] = {"id": user_id, "email": email or f"{user_id}@example.com"}
