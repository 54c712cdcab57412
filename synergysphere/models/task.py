from sqlalchemy import Column, String, Boolean, Date, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from synergysphere.database.base import Base
from synergysphere.enums import TaskStatus
from .common import utcnow, uuid_pk

class Task(Base):
    __tablename__ = "tasks"

    id = uuid_pk()
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=TaskStatus.TODO.value)
    due_date = Column(Date, nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    project = relationship("Project", back_populates="tasks")
    assignees = relationship("TaskAssignee", back_populates="task", passive_deletes=True)
    comments = relationship("TaskComment", back_populates="task", passive_deletes=True)


class TaskAssignee(Base):
    __tablename__ = "task_assignees"

    task_id = Column(Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    assigned_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    task = relationship("Task", back_populates="assignees")
    user = relationship("User")


class TaskComment(Base):
    __tablename__ = "task_comments"

    id = uuid_pk()
    task_id = Column(Uuid, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    body = Column(Text, nullable=False)
    parent_comment_id = Column(Uuid, ForeignKey("task_comments.id", ondelete="CASCADE"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    task = relationship("Task", back_populates="comments")
    author = relationship("User")
