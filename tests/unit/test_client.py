import pytest

from taskboard.client import ApiError, TaskboardClient


@pytest.fixture()
def api(client):
    # the FastAPI TestClient speaks the requests API
    return TaskboardClient("http://testserver", session=client)


def test_register_stores_token(api):
    assert not api.is_authenticated
    user = api.register("Alice", "alice@example.com", "pw123456")
    assert api.is_authenticated
    assert user["email"] == "alice@example.com"
    assert api.get_profile()["name"] == "Alice"


def test_login_and_logout(api, alice):
    api.login("alice@example.com", "pw123456")
    assert api.user["id"] == alice.id
    api.logout()
    assert not api.is_authenticated
    with pytest.raises(ApiError) as excinfo:
        api.list_tasks()
    assert excinfo.value.status_code == 401


def test_bad_login_raises_with_server_message(api, alice):
    with pytest.raises(ApiError) as excinfo:
        api.login("alice@example.com", "wrong-password")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Invalid email or password"


def test_task_roundtrip(api):
    api.register("Alice", "alice@example.com", "pw123456")
    task = api.create_task("Buy milk", priority="high")
    assert task["status"] == "todo"

    assert [t["id"] for t in api.list_tasks(search="MILK")] == [task["id"]]
    assert api.list_tasks(priority="low") == []
    # empty filters are not sent
    assert len(api.list_tasks(status="", priority=None, search="")) == 1

    updated = api.update_task(task["id"], status="completed")
    assert updated["status"] == "completed"
    assert api.get_task(task["id"])["status"] == "completed"

    api.delete_task(task["id"])
    with pytest.raises(ApiError) as excinfo:
        api.get_task(task["id"])
    assert excinfo.value.status_code == 404


def test_update_profile(api):
    api.register("Alice", "alice@example.com", "pw123456")
    user = api.update_profile(bio="hello")
    assert user["bio"] == "hello"
    assert api.user["bio"] == "hello"


def test_token_can_be_handed_over(client, alice):
    first = TaskboardClient("http://testserver", session=client)
    first.login("alice@example.com", "pw123456")
    second = TaskboardClient("http://testserver", token=first.token, session=client)
    assert second.get_profile()["id"] == alice.id
