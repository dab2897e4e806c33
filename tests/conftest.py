import os
import pytest


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["APP_PASSWORD"] = "testpass"
    os.environ["SECRET_KEY"] = "test-secret-key-for-testing"
    os.environ["SEED_CATALOG"] = "1"


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture(scope="session")
def authed_client(client):
    client.post("/login", data={"password": "testpass"}, follow_redirects=False)
    return client


@pytest.fixture
def guest_client(client):
    # No context manager: reuse the session objects the main client's lifespan created.
    from fastapi.testclient import TestClient
    from app.main import app
    return TestClient(app, raise_server_exceptions=True)


@pytest.fixture
def tmp_db(tmp_path):
    """Point core storage functions at a fresh, empty database for one test."""
    from meal_compass.db.database import init_db, override_db_path
    db_file = tmp_path / "core.db"
    with override_db_path(db_file):
        init_db()
        yield db_file
