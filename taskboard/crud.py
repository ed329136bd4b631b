"""Owner-scoped access to tasks, plus registration and login.

Every task lookup filters on both the task id and the owner id, so a task
that belongs to someone else is reported exactly like one that does not
exist.
"""

import logging
from datetime import date
from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .errors import Conflict, NotFound, Unauthenticated, ValidationError
from .schemas import Priority

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "personal"
DEFAULT_PRIORITY = Priority.MEDIUM.value
EDITABLE_FIELDS = ("title", "category", "priority", "due_date", "notes")


# ---- users ----

def create_user(db: Session, username: str, email: str, password: str) -> models.User:
    if not (username or "").strip() or not (email or "").strip() or not password:
        raise ValidationError("All fields are required.")

    if db.query(models.User).filter(models.User.email == email).first():
        raise Conflict("User already exists")

    db_user = models.User(username=username.strip(), email=email, password=password)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise Conflict("User already exists") from None
    db.refresh(db_user)
    logger.info("User registered id=%s", db_user.id)
    return db_user


def login(db: Session, email: str, password: str) -> models.User:
    if not email or not password:
        raise ValidationError("Email and password are required.")

    user = db.query(models.User).filter(models.User.email == email).first()
    if user is None:
        raise NotFound("User not found.")
    if user.password != password:
        logger.info("Login rejected (wrong password) user=%s", user.id)
        raise Unauthenticated("Invalid password.")

    logger.info("Login ok user=%s", user.id)
    return user


# ---- tasks ----

def _clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Task is required.")
    return cleaned


def _clean_priority(priority: Any) -> str:
    if not priority:
        return DEFAULT_PRIORITY
    try:
        return Priority(priority).value
    except ValueError:
        raise ValidationError(f"Unknown priority: {priority}") from None


def create_task(
    db: Session,
    owner_id: str,
    title: Optional[str],
    category: Optional[str] = None,
    priority: Any = None,
    due_date: Optional[date] = None,
    notes: Optional[str] = None,
) -> models.Task:
    db_task = models.Task(
        owner_id=owner_id,
        title=_clean_title(title),
        category=(category or "").strip() or DEFAULT_CATEGORY,
        priority=_clean_priority(priority),
        due_date=due_date,
        notes=(notes or "").strip(),
        completed=False,
    )
    db.add(db_task)
    db.commit()
    db.refresh(db_task)
    logger.info("Task created id=%s owner=%s", db_task.id, owner_id)
    return db_task


def list_tasks(db: Session, owner_id: str) -> List[models.Task]:
    """All of the owner's tasks in storage order."""
    return db.query(models.Task).filter(models.Task.owner_id == owner_id).all()


def get_owned_task(db: Session, owner_id: str, task_id: str) -> models.Task:
    task = (
        db.query(models.Task)
        .filter(models.Task.id == task_id, models.Task.owner_id == owner_id)
        .first()
    )
    if task is None:
        raise NotFound("Todo not found.")
    return task


def toggle_task(db: Session, owner_id: str, task_id: str) -> bool:
    """Flip ``completed`` and return the new value.

    Read-then-write with no lock: two concurrent toggles end in whichever
    state was written last.
    """
    task = get_owned_task(db, owner_id, task_id)
    task.completed = not task.completed
    db.commit()
    db.refresh(task)
    logger.info("Task toggled id=%s completed=%s", task.id, task.completed)
    return task.completed


def update_task(db: Session, owner_id: str, task_id: str, **fields: Any) -> models.Task:
    """Replace the given editable fields; fields not passed are left alone."""
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Field(s) not editable: {', '.join(sorted(unknown))}")

    task = get_owned_task(db, owner_id, task_id)

    changes = {}
    if "title" in fields:
        changes["title"] = _clean_title(fields["title"])
    if "category" in fields:
        changes["category"] = (fields["category"] or "").strip() or DEFAULT_CATEGORY
    if "priority" in fields:
        changes["priority"] = _clean_priority(fields["priority"])
    if "due_date" in fields:
        changes["due_date"] = fields["due_date"]
    if "notes" in fields:
        changes["notes"] = (fields["notes"] or "").strip()

    for field, value in changes.items():
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    logger.info("Task updated id=%s fields=%s", task.id, sorted(fields))
    return task


def delete_task(db: Session, owner_id: str, task_id: str) -> None:
    task = get_owned_task(db, owner_id, task_id)
    db.delete(task)
    db.commit()
    logger.info("Task deleted id=%s owner=%s", task_id, owner_id)
