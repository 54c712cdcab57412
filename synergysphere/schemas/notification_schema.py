import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

class NotificationResponse(BaseModel):
    id: uuid.UUID
    type: str
    payload: Any = None
    project_id: Optional[uuid.UUID] = None
    task_id: Optional[uuid.UUID] = None
    actor_id: Optional[uuid.UUID] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True

class ReadAllRequest(BaseModel):
    type: Optional[str] = None
    project_id: Optional[str] = None
    task_id: Optional[str] = None

class NotificationCount(BaseModel):
    unread_count: int
