"""
Demo data for local development.

    python -m taskboard.seed

Creates demo@example.com / password123 if it does not exist yet and replaces
that user's tasks with a fresh set.
"""
import logging
import sys

from sqlalchemy.orm import Session

from taskboard.config import LOG_LEVEL
from taskboard.database import Base, SessionLocal, engine
from taskboard.logging_setup import setup_logging
from taskboard.models import Task, TaskPriority, TaskStatus, User
from taskboard.security import get_password_hash

logger = logging.getLogger(__name__)

DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password123"

DEMO_TASKS = [
    {
        "title": "Welcome to Task Manager",
        "description": "This is your first task. Edit or delete it.",
        "priority": TaskPriority.medium,
        "status": TaskStatus.todo,
    },
    {
        "title": "Explore the Dashboard",
        "description": "Try creating a task, filtering and searching.",
        "priority": TaskPriority.low,
        "status": TaskStatus.todo,
    },
    {
        "title": "Complete your onboarding",
        "description": "Mark this as completed when you finish setup.",
        "priority": TaskPriority.high,
        "status": TaskStatus.in_progress,
    },
]


def seed_demo_data(db: Session) -> User:
    user = db.query(User).filter(User.email == DEMO_EMAIL).first()
    if user is None:
        user = User(name=DEMO_NAME, email=DEMO_EMAIL, hashed_password=get_password_hash(DEMO_PASSWORD))
        db.add(user)
        db.flush()
        logger.info("Created demo user %s", DEMO_EMAIL)
    else:
        logger.info("Demo user %s already exists", DEMO_EMAIL)

    removed = db.query(Task).filter(Task.owner_id == user.id).delete(synchronize_session=False)
    for item in DEMO_TASKS:
        db.add(
            Task(
                title=item["title"],
                description=item["description"],
                priority=item["priority"].value,
                status=item["status"].value,
                owner_id=user.id,
            )
        )
    db.commit()
    logger.info("Replaced %d demo tasks with %d fresh ones", removed, len(DEMO_TASKS))
    return user


def main() -> int:
    setup_logging(LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_demo_data(db)
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        db.close()
    logger.info("Seeding completed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
