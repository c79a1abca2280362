import importlib

import pytest
from fastapi.testclient import TestClient

import taskboard.config
import taskboard.dependencies
import taskboard.main
import taskboard.routers.auth
import taskboard.routers.tasks
from taskboard.database import get_db

from conftest import TestingSessionLocal

# config first, the app module last
APP_MODULES = [
    taskboard.config,
    taskboard.dependencies,
    taskboard.routers.auth,
    taskboard.routers.tasks,
    taskboard.main,
]


def _reload_app():
    for module in APP_MODULES:
        importlib.reload(module)
    return taskboard.main.app


@pytest.fixture()
def prefixed_app(monkeypatch):
    monkeypatch.setenv("API_PREFIX", "/api/")
    monkeypatch.setenv("CORS_ORIGINS", "http://ui.example.com, http://localhost:3000")
    app = _reload_app()

    def get_test_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = get_test_db
    yield app
    app.dependency_overrides.clear()
    monkeypatch.undo()
    _reload_app()


def test_routes_mounted_under_prefix(prefixed_app):
    client = TestClient(prefixed_app)
    r = client.post("/api/auth/register", json={"name": "Pat", "email": "pat@example.com", "password": "pw123456"})
    assert r.status_code == 201
    headers = {"Authorization": f"Bearer {r.json()['token']}"}

    assert client.post("/api/tasks", json={"title": "prefixed"}, headers=headers).status_code == 201
    assert client.get("/api/tasks", headers=headers).json()["count"] == 1
    assert client.get("/tasks", headers=headers).status_code == 404


def test_token_url_follows_prefix(prefixed_app):
    schema = TestClient(prefixed_app).get("/openapi.json").json()
    flows = schema["components"]["securitySchemes"]["OAuth2PasswordBearer"]["flows"]
    assert flows["password"]["tokenUrl"] == "/api/auth/token"


def test_cors_allows_configured_origins(prefixed_app):
    client = TestClient(prefixed_app)
    r = client.options(
        "/api/tasks",
        headers={"Origin": "http://ui.example.com", "Access-Control-Request-Method": "GET"},
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://ui.example.com"

    r = client.options(
        "/api/tasks",
        headers={"Origin": "http://evil.example.com", "Access-Control-Request-Method": "GET"},
    )
    assert "access-control-allow-origin" not in r.headers


def test_default_app_has_no_prefix(client):
    assert client.post("/auth/login", json={"email": "x@example.com", "password": "pw"}).status_code == 400
