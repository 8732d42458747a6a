"""Shared fixtures: environment, an in-memory table store and a fake auth provider."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import ColorLogger
from shared.models.auth import AuthResult, AuthSession, AuthUser
from shared.models.document import DakDocument

BASE_TIME = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

DEPARTMENTS = [
    {"id": "dep-fin", "name": "Finance", "code": "FIN", "branch": "main", "is_active": True},
    {"id": "dep-adm", "name": "Administration", "code": "ADM", "branch": "main", "is_active": True},
    {"id": "dep-old", "name": "Archive", "code": "ARC", "branch": "main", "is_active": False},
]


class FakeStore:
    """In-memory stand-in for a store client, honouring the same call contract."""

    def __init__(self, departments: list[dict] | None = None):
        self.departments = [dict(d) for d in (departments if departments is not None else DEPARTMENTS)]
        self.documents: list[dict] = []
        self.calls: list[dict] = []
        self.error: Exception | None = None
        self._sequence = 0

    def _record(self, op: str, table: str, **kwargs) -> None:
        self.calls.append({"op": op, "table": table, **kwargs})
        if self.error is not None:
            raise self.error

    def _department_ref(self, department_id: str | None) -> dict | None:
        for department in self.departments:
            if department["id"] == department_id:
                return {"name": department["name"], "code": department["code"]}
        return None

    async def do_select(self, table, columns="*", filters=None, order=None, limit=None, access_token=None):
        self._record("select", table, columns=columns, filters=filters, order=order, limit=limit, access_token=access_token)
        if table == "departments":
            rows = [dict(d) for d in self.departments if all(d.get(k) == v for k, v in (filters or {}).items())]
            return sorted(rows, key=lambda d: d["name"])
        rows = sorted(self.documents, key=lambda d: d["created_at"], reverse=True)
        if limit is not None:
            rows = rows[:limit]
        return [{**row, "departments": self._department_ref(row.get("department_id"))} for row in rows]

    async def do_insert(self, table, row, access_token=None):
        self._record("insert", table, row=row, access_token=access_token)
        self._sequence += 1
        stamp = (BASE_TIME + timedelta(minutes=self._sequence)).isoformat()
        prefix = "IN" if row["type"] == "inward" else "OUT"
        stored = {
            **row,
            "id": f"doc-{self._sequence}",
            "dak_number": f"DAK/{prefix}/2026/{self._sequence:05d}",
            "created_at": stamp,
            "updated_at": stamp,
        }
        self.documents.append(stored)
        return dict(stored)

    async def do_update(self, table, match, patch, access_token=None):
        self._record("update", table, match=match, patch=patch, access_token=access_token)
        updated = []
        for row in self.documents:
            if all(row.get(k) == v for k, v in match.items()):
                row.update(patch)
                updated.append(dict(row))
        return updated


class FakeAuthClient:
    """Accepts the password "secret" and the token "valid-token"."""

    def __init__(self):
        self.signed_out: list[str] = []

    async def do_sign_in(self, email: str, password: str) -> AuthResult:
        if password != "secret":
            return AuthResult(error="Invalid login credentials")
        return AuthResult(session=AuthSession(access_token="valid-token", refresh_token="refresh", user=AuthUser(id="user-1", email=email)))

    async def do_get_user(self, access_token: str) -> AuthUser | None:
        if access_token != "valid-token":
            return None
        return AuthUser(id="user-1", email="clerk@example.org")

    async def do_sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


def make_document(**overrides) -> DakDocument:
    """A valid stored document; override any field, or pass department=None for an unresolved one."""
    department = overrides.pop("department", "Finance")
    values = {
        "id": "doc-1",
        "dak_number": "DAK/IN/2026/00001",
        "type": "inward",
        "subject": "Budget circular",
        "sender": "Ministry of Finance",
        "department_id": "dep-fin",
        "priority": "medium",
        "status": "received",
        "created_at": BASE_TIME,
        "updated_at": BASE_TIME,
        "departments": {"name": department, "code": department[:3].upper()} if department else None,
    }
    values.update(overrides)
    return DakDocument.model_validate(values)


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("STORE_SUPABASE_BASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("STORE_SUPABASE_API_KEY", "anon-key")
    monkeypatch.setenv("AUTH_SUPABASE_BASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("AUTH_SUPABASE_API_KEY", "anon-key")
    monkeypatch.setenv("TIMEZONE", "Asia/Kolkata")
    monkeypatch.delenv("DAK_FETCH_LIMIT", raising=False)
    return monkeypatch


@pytest.fixture
def helper_config(env) -> HelperConfig:
    return HelperConfig(logger=ColorLogger(logging.getLogger("dak_tracker.tests")))


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def session() -> AuthSession:
    return AuthSession(access_token="valid-token", user=AuthUser(id="user-1", email="clerk@example.org"))
