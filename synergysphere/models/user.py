from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship

from synergysphere.database.base import Base
from .common import utcnow, uuid_pk

class User(Base):
    __tablename__ = "users"

    id = uuid_pk()
    # Always stored lower-cased so lookups are case-insensitive
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    full_name = Column(String(255), nullable=False)
    avatar_url = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    projects = relationship("Project", back_populates="creator", passive_deletes=True)
    notifications = relationship(
        "Notification",
        back_populates="user",
        foreign_keys="Notification.user_id",
        passive_deletes=True,
    )
