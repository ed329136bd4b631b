from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Task schemas
class TaskCreate(BaseModel):
    # Emptiness is checked after trimming in the store.
    title: str = Field(..., max_length=200)
    category: Optional[str] = Field(None, max_length=50)
    priority: Optional[Priority] = None
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=50)
    priority: Optional[Priority] = None
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)


class Task(BaseModel):
    id: str
    owner_id: str
    title: str
    category: str
    priority: Priority
    due_date: Optional[date] = None
    notes: str = ""
    completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ToggleResult(BaseModel):
    message: str
    completed: bool


class Categories(BaseModel):
    categories: List[str]


StatusFilter = Literal["all", "active", "completed"]


# User schemas
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class Registered(BaseModel):
    message: str
    user_id: str


class LoggedIn(BaseModel):
    message: str
    user_id: str
    email: str
    username: str


class Message(BaseModel):
    message: str
