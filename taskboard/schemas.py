from datetime import date, datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, constr, field_validator
from pydantic.alias_generators import to_camel

from taskboard.models import TaskPriority, TaskStatus

Name = constr(strip_whitespace=True, min_length=1, max_length=50)
Title = constr(strip_whitespace=True, min_length=1, max_length=200)
Description = constr(max_length=2000)
Password = constr(min_length=6, max_length=128)


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both spellings accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -----------------------------
# Users / auth
# -----------------------------
class UserCreate(BaseModel):
    name: Name
    email: EmailStr
    password: Password


class UserLogin(BaseModel):
    email: EmailStr
    password: constr(min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[Name] = None
    bio: Optional[constr(max_length=500)] = None
    avatar: Optional[constr(strip_whitespace=True, max_length=500)] = None


class UserOut(CamelModel):
    id: str
    name: str
    email: str
    bio: Optional[str] = ""
    avatar: Optional[str] = ""
    created_at: datetime


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserOut


class UserResponse(BaseModel):
    success: bool = True
    user: UserOut


class Token(BaseModel):
    access_token: str
    token_type: str


# -----------------------------
# Tasks
# -----------------------------
class _DueDateMixin(CamelModel):
    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def _blank_due_date(cls, value):
        # the web form posts "" when the date picker is left empty
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TaskCreate(_DueDateMixin):
    title: Title
    description: Optional[Description] = ""
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[date] = None


class TaskUpdate(_DueDateMixin):
    title: Optional[Title] = None
    description: Optional[Description] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None


class TaskOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = ""
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[date] = None
    owner: str = Field(validation_alias=AliasChoices("owner_id", "owner"))
    created_at: datetime
    updated_at: datetime


class TaskResponse(BaseModel):
    success: bool = True
    task: TaskOut


class TaskListResponse(BaseModel):
    success: bool = True
    count: int
    tasks: List[TaskOut]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class TaskFilters(BaseModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    search: Optional[str] = None

    @field_validator("status", "priority", "search", mode="before")
    @classmethod
    def _blank_is_absent(cls, value):
        # the "All" options of the web filters arrive as ""
        if isinstance(value, str) and not value.strip():
            return None
        return value
