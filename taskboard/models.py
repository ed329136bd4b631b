import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, String, Text

from .database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True, default=_new_id)
    username = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    # Stored verbatim; see DESIGN.md.
    password = Column(String, nullable=False)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, index=True, default=_new_id)
    # Plain reference to users.id: checked on every access, never cascaded.
    owner_id = Column(String, index=True, nullable=False)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False, default="personal")
    priority = Column(String, nullable=False, default="medium")
    due_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=False, default="")
    completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
