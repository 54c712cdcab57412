from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from synergysphere.database.base import Base
from .common import utcnow, uuid_pk

class DiscussionThread(Base):
    __tablename__ = "discussion_threads"

    id = uuid_pk()
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="threads")
    author = relationship("User")
    messages = relationship("DiscussionMessage", back_populates="thread", passive_deletes=True)


class DiscussionMessage(Base):
    __tablename__ = "discussion_messages"

    id = uuid_pk()
    thread_id = Column(Uuid, ForeignKey("discussion_threads.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    body = Column(Text, nullable=False)
    parent_message_id = Column(Uuid, ForeignKey("discussion_messages.id", ondelete="CASCADE"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    thread = relationship("DiscussionThread", back_populates="messages")
    author = relationship("User")
