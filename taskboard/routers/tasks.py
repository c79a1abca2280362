import enum
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.dependencies import get_current_user, get_owned_task
from taskboard.models import Task, TaskPriority, TaskStatus, User
from taskboard.schemas import MessageResponse, TaskCreate, TaskFilters, TaskListResponse, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

# columns that can never be emptied through an update
NOT_NULLABLE = {"title", "status", "priority"}


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def filter_tasks(
    db: Session,
    owner: User,
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    search: Optional[str] = None,
):
    """The caller's tasks matching every given filter, newest first."""
    query = db.query(Task).filter(Task.owner_id == owner.id)
    if status:
        query = query.filter(Task.status == status.value)
    if priority:
        query = query.filter(Task.priority == priority.value)
    if search:
        pattern = _like_pattern(search)
        query = query.filter(
            or_(Task.title.ilike(pattern, escape="\\"), Task.description.ilike(pattern, escape="\\"))
        )
    return query.order_by(desc(Task.created_at)).all()


# -----------------------------
# CRUD
# -----------------------------
@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    db_task = Task(
        title=task.title,
        description=task.description or "",
        status=task.status.value,
        priority=task.priority.value,
        due_date=task.due_date,
        owner_id=current_user.id,
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    logger.info("User %s created task %s", current_user.id, db_task.id)
    return {"task": db_task}


def task_filters(
    status: Optional[str] = Query(None, description="todo | in-progress | completed"),
    priority: Optional[str] = Query(None, description="low | medium | high"),
    search: Optional[str] = None,
) -> TaskFilters:
    try:
        return TaskFilters(status=status, priority=priority, search=search)
    except ValidationError as exc:
        raise RequestValidationError([{**err, "loc": ("query", *err["loc"])} for err in exc.errors()])


@router.get("", response_model=TaskListResponse)
def get_tasks(
    filters: TaskFilters = Depends(task_filters),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    tasks = filter_tasks(db, current_user, status=filters.status, priority=filters.priority, search=filters.search)
    return {"count": len(tasks), "tasks": tasks}


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(task: Task = Depends(get_owned_task)):
    return {"task": task}


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(task_update: TaskUpdate, task: Task = Depends(get_owned_task), db: Session = Depends(get_db)):
    for field, value in task_update.model_dump(exclude_unset=True).items():
        if value is None and field in NOT_NULLABLE:
            continue
        if isinstance(value, enum.Enum):
            value = value.value
        if field == "description" and value is None:
            value = ""
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    logger.info("Updated task %s", task.id)
    return {"task": task}


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(task: Task = Depends(get_owned_task), db: Session = Depends(get_db)):
    task_id = task.id
    db.delete(task)
    db.commit()
    logger.info("Deleted task %s", task_id)
    return {"message": "Task deleted successfully"}
