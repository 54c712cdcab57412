import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from synergysphere.schemas.common import require_text

class ThreadCreate(BaseModel):
    title: str

    @field_validator("title")
    @classmethod
    def check_title(cls, v):
        return require_text(v, "title")

class ThreadUpdate(ThreadCreate):
    pass

class ThreadResponse(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    title: str
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MessageCreate(BaseModel):
    body: str
    parent_message_id: Optional[str] = None

    @field_validator("body")
    @classmethod
    def check_body(cls, v):
        return require_text(v, "body")

class MessageUpdate(BaseModel):
    body: str

    @field_validator("body")
    @classmethod
    def check_body(cls, v):
        return require_text(v, "body")

class MessageResponse(BaseModel):
    id: uuid.UUID
    thread_id: uuid.UUID
    author_id: uuid.UUID
    body: str
    parent_message_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
