from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship

from synergysphere.database.base import Base
from .common import utcnow, uuid_pk

class Notification(Base):
    __tablename__ = "notifications"

    id = uuid_pk()
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(50), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)

    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True)
    task_id = Column(Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True)
    actor_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="notifications", foreign_keys=[user_id])
    actor = relationship("User", foreign_keys=[actor_id])
