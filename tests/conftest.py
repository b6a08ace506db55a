import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TMDB_API_KEY", "test-key")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from streamsphere.main import app
from streamsphere.database import get_db
from streamsphere.services.tmdb_service import TMDBClient, get_tmdb_client


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_db_override():
        return session

    app.dependency_overrides[get_db] = get_db_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client: TestClient):
    """
    Create an account and return (user json, auth headers).
    """
    counter = {"n": 0}

    def _register(role: str = "user", name: str = None):
        counter["n"] += 1
        email = f"person{counter['n']}@example.com"
        payload = {
            "name": name or f"Person {counter['n']}",
            "email": email,
            "password": "s3cret-pass",
            "role": role,
        }
        r = client.post("/api/auth/register", json=payload)
        assert r.status_code == 201, r.text
        r = client.post("/api/auth/login", json={"email": email, "password": "s3cret-pass"})
        assert r.status_code == 200, r.text
        body = r.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


@pytest.fixture
def mock_tmdb():
    """
    Route TMDB calls to ``handler(request) -> httpx.Response``. Returns the
    list of requests seen.
    """
    seen = []

    def _install(handler):
        def recording(request: httpx.Request):
            seen.append(request)
            return handler(request)

        async def override():
            transport = httpx.MockTransport(recording)
            async with httpx.AsyncClient(transport=transport, base_url="https://tmdb.test/3") as http:
                yield TMDBClient(http, "test-key")

        app.dependency_overrides[get_tmdb_client] = override
        return seen

    return _install
