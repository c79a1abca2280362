import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from taskboard.config import API_PREFIX
from taskboard.database import get_db
from taskboard.errors import Forbidden, NotFound, Unauthenticated
from taskboard.models import Task, User
from taskboard.security import InvalidToken, verify_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{API_PREFIX}/auth/token")


def get_current_user(request: Request, token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    try:
        user_id = verify_token(token)
    except InvalidToken as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Unauthenticated("Not authorized, token failed")
    user = db.get(User, user_id)
    if user is None:
        logger.info("Bearer token for unknown user %s", user_id)
        raise Unauthenticated("Not authorized, user not found")
    request.state.user = user
    return user


# -----------------------------
# Task ownership
# -----------------------------
def is_owner(task: Task, user: User) -> bool:
    return task.owner_id == user.id


def get_owned_task(task_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> Task:
    """Resolve a task the caller owns: 404 if it does not exist, 403 if it is someone else's."""
    task = db.get(Task, task_id)
    if task is None:
        raise NotFound("Task not found")
    if not is_owner(task, current_user):
        logger.warning("User %s denied access to task %s", current_user.id, task_id)
        raise Forbidden("Not authorized to access this task")
    return task
