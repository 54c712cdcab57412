import uuid
from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synergysphere.enums import TaskStatus
from synergysphere.schemas.common import require_text

class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    is_archived: bool = False
    # Optional assignees, inserted in the same transaction as the task
    assignee_ids: List[str] = []

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return require_text(v, "title")

class TaskUpdate(BaseModel):
    """Partial update: only fields present in the body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None
    is_archived: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return require_text(v, "title")

    @field_validator("status", "is_archived")
    @classmethod
    def check_not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

class TaskResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: str
    due_date: Optional[date] = None
    is_archived: bool
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class AssigneeCreate(BaseModel):
    """Accepts a single `userId`, a list of `userIds`, or both."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[Any] = Field(default=None, alias="userId")
    user_ids: Optional[List[Any]] = Field(default=None, alias="userIds")

    def requested_ids(self) -> list:
        ids = []
        if isinstance(self.user_id, str):
            ids.append(self.user_id)
        if self.user_ids:
            ids.extend(self.user_ids)
        return ids

class CommentCreate(BaseModel):
    body: str
    parent_comment_id: Optional[str] = None

    @field_validator("body")
    @classmethod
    def check_body(cls, v):
        return require_text(v, "body")

class CommentUpdate(BaseModel):
    body: str

    @field_validator("body")
    @classmethod
    def check_body(cls, v):
        return require_text(v, "body")

class CommentResponse(BaseModel):
    id: uuid.UUID
    task_id: uuid.UUID
    author_id: uuid.UUID
    body: str
    parent_comment_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
