"""
Fixtures communes : base SQLite en mémoire injectée à la place de get_session,
un compte par rôle, et des clients HTTP déjà connectés.

Run:
    pytest -v
"""

import os

# Avant tout import de l'app : settings est lu à l'import
os.environ.setdefault("ENV", "test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from pdr_tracker.main import app
from pdr_tracker.db.models.local_users import LocalUser
from pdr_tracker.db.session import enable_sqlite_foreign_keys, get_session, init_db
from pdr_tracker.security.passwords import hash_password

API = "/api/v1"

PASSWORDS = {
    "admin": "admin-pass",
    "agent": "agent-pass",
    "superviseur1": "superviseur-pass",
}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture(autouse=True)
def override_session(engine):
    def _get_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _get_session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def users(engine):
    """Un compte par rôle : admin / agent (user) / superviseur1 (superviseur)."""
    roles = {"admin": "admin", "agent": "user", "superviseur1": "superviseur"}
    created = {}
    with Session(engine) as s:
        for username, role in roles.items():
            user = LocalUser(username=username, hashed_password=hash_password(PASSWORDS[username]), role=role)
            s.add(user)
            s.commit()
            s.refresh(user)
            created[username] = user.id
    return created


def login(client: TestClient, username: str, password: str):
    return client.post(f"{API}/auth/login", json={"username": username, "password": password})


@pytest.fixture
def anon_client():
    return TestClient(app)


@pytest.fixture
def make_client(users):
    def _make(username: str) -> TestClient:
        client = TestClient(app)
        res = login(client, username, PASSWORDS[username])
        assert res.status_code == 200, res.text
        return client
    return _make


@pytest.fixture
def admin_client(make_client):
    return make_client("admin")


@pytest.fixture
def user_client(make_client):
    return make_client("agent")


@pytest.fixture
def superviseur_client(make_client):
    return make_client("superviseur1")


def project_payload(**overrides):
    payload = {
        "identifier": "PDR-OR-2024-001",
        "title": "Aménagement de la route RP 6012",
        "axis": "Infrastructures de base",
        "domain": "Routes",
        "region": "Oriental",
        "province": "Berkane",
        "commune": "Saïdia",
        "budget": "1500000.00",
        "engagements": "250000.00",
        "payments": "100000.00",
        "physical_progress": 20,
        "status": "active",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_project(user_client):
    def _create(**overrides):
        res = user_client.post(f"{API}/projects", json=project_payload(**overrides))
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_partner(user_client):
    def _create(name="Conseil Régional de l'Oriental", type="Collectivité territoriale"):
        res = user_client.post(f"{API}/partners", json={"name": name, "type": type})
        assert res.status_code == 201, res.text
        return res.json()
    return _create


@pytest.fixture
def create_convention(user_client):
    def _create(**overrides):
        payload = {
            "title": "Convention de financement du réseau routier",
            "status": "pending",
            "programme": "Programme de Développement Régional Oriental 2022-2027",
        }
        payload.update(overrides)
        res = user_client.post(f"{API}/conventions", json=payload)
        assert res.status_code == 201, res.text
        return res.json()
    return _create
