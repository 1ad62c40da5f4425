import importlib
import sys
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

repo_root = str(Path(__file__).resolve().parents[1])
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

TODAY = date(2030, 6, 15)


@pytest.fixture
def museum(tmp_path, monkeypatch):
    """Fresh import of the app bound to a throwaway SQLite database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path}/test.db")
    monkeypatch.setenv("ADMIN_USER", "curator")
    monkeypatch.setenv("ADMIN_PASSWORD", "s3cret")

    for mod in [m for m in list(sys.modules) if m == "app" or m.startswith("app.")]:
        sys.modules.pop(mod, None)

    ns = SimpleNamespace(
        main=importlib.import_module("app.main"),
        session=importlib.import_module("app.db.session"),
        repository=importlib.import_module("app.db.repository"),
        validation=importlib.import_module("app.services.validation"),
        errors=importlib.import_module("app.core.errors"),
        bookings=importlib.import_module("app.api.routers.bookings"),
        health=importlib.import_module("app.api.routers.health"),
        admin=importlib.import_module("app.api.routers.admin"),
        clock=importlib.import_module("app.core.clock"),
    )
    ns.session.create_schema()
    yield ns
    ns.main.app.dependency_overrides.clear()
    ns.session.engine.dispose()


@pytest.fixture
def db(museum):
    s = museum.session.SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(museum):
    museum.main.app.dependency_overrides[museum.bookings.get_today] = lambda: TODAY
    with TestClient(museum.main.app) as c:
        yield c


@pytest.fixture
def make_payload():
    def _make(**overrides):
        payload = {
            "visitorName": "Jo",
            "email": "jo@x.com",
            "phone": "555-0100",
            "visitDate": "2999-01-01",
            "numberOfVisitors": 3,
            "tourType": "guided",
        }
        payload.update(overrides)
        return payload

    return _make
