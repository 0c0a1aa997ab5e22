"""Shared fixtures: an in-memory stand-in for the supabase client and seeded rows."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database.gateway import DataGateway
from app.database.supabase_client import get_supabase
from app.modules.dashboard.service import DashboardService
from app.modules.dashboard.view_state import ViewState

ADMIN_EMAIL = "admin@carmarket.test"
ADMIN_PASSWORD = "s3cret"


class FakeAPIError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FakeResponse:
    def __init__(self, data: Any) -> None:
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.values: Dict[str, Any] = {}
        self.filters: List[Callable[[dict], bool]] = []
        self.order_by: Optional[Tuple[str, bool]] = None
        self.single = False

    def select(self, *_columns: str) -> "FakeQuery":
        self.op = "select"
        return self

    def update(self, values: Dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.values = values
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]) -> "FakeQuery":
        allowed = set(values)
        self.filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def maybe_single(self) -> "FakeQuery":
        self.single = True
        return self

    def execute(self) -> Optional[FakeResponse]:
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure:
            raise FakeAPIError(failure)

        rows = self.db.tables.setdefault(self.table, [])
        matched = [row for row in rows if all(check(row) for check in self.filters)]

        if self.op == "update":
            for row in matched:
                row.update(self.values)
            return FakeResponse(copy.deepcopy(matched))
        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return FakeResponse(copy.deepcopy(matched))

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: row[column], reverse=desc)
        if self.single:
            return FakeResponse(copy.deepcopy(matched[0])) if matched else None
        return FakeResponse(copy.deepcopy(matched))


class FakeSupabase:
    """Enough of supabase.Client for the gateway: table() query chains over dict rows."""

    def __init__(self, tables: Dict[str, List[dict]]) -> None:
        self.tables = tables
        self.calls: List[Tuple[str, str]] = []
        self.failures: Dict[Tuple[str, str], str] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def fail(self, table: str, op: str, message: str = "connection reset") -> None:
        self.failures[(table, op)] = message

    def rows(self, table: str) -> List[dict]:
        return self.tables.get(table, [])


def make_user(user_id: str, email: Optional[str], full_name: Optional[str], created: str, **extra: Any) -> dict:
    row = {
        "id": user_id,
        "email": email,
        "full_name": full_name,
        "is_verified": False,
        "verification_status": None,
        "verified_at": None,
        "created_at": created,
    }
    row.update(extra)
    return row


def make_car(car_id: str, user_id: str, price: float, created: str, **extra: Any) -> dict:
    row = {
        "id": car_id,
        "user_id": user_id,
        "brand": "Maruti",
        "model": "Swift",
        "year": 2020,
        "price": price,
        "images": [f"https://img.test/{car_id}/1.jpg"],
        "is_sold": False,
        "is_featured": False,
        "is_verified": False,
        "views": 0,
        "created_at": created,
    }
    row.update(extra)
    return row


def make_request(request_id: str, user_id: str, document_type: str, created: str, status: str = "pending") -> dict:
    return {
        "id": request_id,
        "user_id": user_id,
        "document_type": document_type,
        "front_image_url": f"https://img.test/{request_id}/front.jpg",
        "back_image_url": f"https://img.test/{request_id}/back.jpg",
        "status": status,
        "admin_note": None,
        "created_at": created,
        "updated_at": None,
    }


def seed_tables() -> Dict[str, List[dict]]:
    return {
        "profiles": [
            make_user("u1", "john@example.com", "John Doe", "2024-01-03T10:00:00+00:00"),
            make_user("u2", "jane@example.com", "Jane Smith", "2024-01-02T10:00:00+00:00",
                      is_verified=True, verification_status="approved"),
            make_user("u3", "mike@example.com", None, "2024-01-01T10:00:00+00:00"),
        ],
        "cars": [
            make_car("c1", "u1", 500000, "2024-02-01T10:00:00+00:00",
                     views=10, is_verified=True, is_featured=True),
            make_car("c2", "u2", 1500000, "2024-02-02T10:00:00+00:00", views=None, is_sold=True),
            make_car("c3", "ghost", 250000, "2024-02-03T10:00:00+00:00", views=5),
        ],
        "verification_requests": [
            make_request("r1", "u1", "CNIC", "2024-03-01T10:00:00+00:00"),
            make_request("r2", "u2", "Driving License", "2024-03-02T10:00:00+00:00", status="approved"),
            make_request("r3", "ghost", "Passport", "2024-03-03T10:00:00+00:00"),
        ],
    }


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase(seed_tables())


@pytest.fixture
def gateway(fake_db: FakeSupabase) -> DataGateway:
    return DataGateway(fake_db)


@pytest.fixture
def loaded_state(gateway: DataGateway) -> ViewState:
    state = ViewState()
    state.apply(DashboardService(gateway).load_all())
    return state


@pytest.fixture
def admin_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setattr(settings, "admin_email", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "session_file", str(tmp_path / "admin_session"))
    return settings


@pytest.fixture
def client(admin_settings, fake_db: FakeSupabase):
    from app.main import app

    app.dependency_overrides[get_supabase] = lambda: fake_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    response = client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client
