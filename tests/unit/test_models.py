from taskboard.models import Task, TaskPriority, TaskStatus, User


def test_task_defaults():
    task = Task(title="read")
    assert task.status == TaskStatus.todo.value
    assert task.priority == TaskPriority.medium.value
    assert task.description == ""
    assert task.due_date is None


def test_task_explicit_values_kept():
    task = Task(title="ship", status="completed", priority="high", description="x")
    assert task.status == "completed"
    assert task.priority == "high"
    assert task.description == "x"


def test_enum_values():
    assert [s.value for s in TaskStatus] == ["todo", "in-progress", "completed"]
    assert [p.value for p in TaskPriority] == ["low", "medium", "high"]


def test_user_repr_hides_password():
    user = User(name="Alice", email="alice@example.com", hashed_password="notplain")
    assert "notplain" not in repr(user)


def test_ids_assigned_on_flush(db_session):
    user = User(name="Alice", email="alice@example.com", hashed_password="x")
    db_session.add(user)
    db_session.flush()
    task = Task(title="t", owner_id=user.id)
    db_session.add(task)
    db_session.commit()
    assert len(user.id) == 32
    assert task.id != user.id
    assert task.created_at is not None
    assert task.owner is user
