import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from synergysphere.enums import ProjectRole, ProjectStatus
from synergysphere.schemas.common import require_text

class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "name")

class ProjectUpdate(BaseModel):
    """Partial update: only fields present in the body are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v, "name")

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        if v is None:
            raise ValueError("status cannot be null")
        return v

class ProjectResponse(BaseModel):
    id: uuid.UUID
    created_by: uuid.UUID
    name: str
    description: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MemberCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    role: ProjectRole = ProjectRole.MEMBER

class MemberUpdate(BaseModel):
    role: ProjectRole

class MemberResponse(BaseModel):
    project_id: uuid.UUID
    user_id: uuid.UUID
    role: str
    added_at: datetime

    class Config:
        from_attributes = True
