import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from synergysphere.schemas.common import require_text

class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    full_name: str
    avatar_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, v):
        return require_text(v, "full_name")
