import os

# fast bcrypt for the whole test run; must be set before taskboard is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import sessionmaker

from taskboard.database import Base, get_db, make_engine
from taskboard.main import app
from taskboard.models import Task, User
from taskboard.security import create_access_token, get_password_hash

# Separate test database file
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = make_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


# Fresh tables for every test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


# Swap the get_db dependency for the test database
@pytest.fixture(autouse=True)
def override_get_db():
    def get_test_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client():
    return TestClient(app)


# HTTP client over ASGITransport
@pytest.fixture()
async def aclient():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# -----------------------------
# Users and tasks
# -----------------------------
@pytest.fixture()
def make_user(db_session):
    def _make_user(name="Alice", email="alice@example.com", password="pw123456"):
        user = User(name=name, email=email, hashed_password=get_password_hash(password))
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def alice(make_user):
    return make_user()


@pytest.fixture()
def bob(make_user):
    return make_user(name="Bob", email="bob@example.com")


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers(alice):
    return bearer(alice)


@pytest.fixture()
def bob_headers(bob):
    return bearer(bob)


@pytest.fixture()
def make_task(db_session, alice):
    def _make_task(owner=None, **fields):
        fields.setdefault("title", "Task")
        task = Task(owner_id=(owner or alice).id, **fields)
        db_session.add(task)
        db_session.commit()
        db_session.refresh(task)
        return task

    return _make_task
