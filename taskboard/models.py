import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, event
from sqlalchemy.orm import relationship

from taskboard.database import Base


class TaskStatus(str, enum.Enum):
    todo = "todo"
    in_progress = "in-progress"
    completed = "completed"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # naive UTC, SQLite drops tzinfo anyway
    return datetime.now(timezone.utc).replace(tzinfo=None)


# -----------------------------
# Models
# -----------------------------
class User(Base):
    __tablename__ = "users"
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    bio = Column(Text, default="")
    avatar = Column(String(500), default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    tasks = relationship("Task", back_populates="owner", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User id={self.id!r} email={self.email!r}>"


class Task(Base):
    __tablename__ = "tasks"
    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    status = Column(String(20), index=True, nullable=False, default=TaskStatus.todo.value)
    priority = Column(String(10), index=True, nullable=False, default=TaskPriority.medium.value)
    due_date = Column(Date, nullable=True)
    owner_id = Column(String(32), ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    owner = relationship("User", back_populates="tasks")

    def __repr__(self):
        return f"<Task id={self.id!r} owner={self.owner_id!r} title={self.title!r}>"


@event.listens_for(Task, "init", propagate=True)
def _task_init(target, args, kwargs):
    # column defaults only fire on flush; make a fresh Task report them too
    if kwargs.get("status") is None:
        target.status = TaskStatus.todo.value
    if kwargs.get("priority") is None:
        target.priority = TaskPriority.medium.value
    if "description" not in kwargs:
        target.description = ""
