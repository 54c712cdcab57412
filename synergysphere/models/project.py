from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from synergysphere.database.base import Base
from synergysphere.enums import ProjectStatus, ProjectRole
from .common import utcnow, uuid_pk

class Project(Base):
    __tablename__ = "projects"

    id = uuid_pk()
    created_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ProjectStatus.ACTIVE.value)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    creator = relationship("User", back_populates="projects")
    members = relationship("ProjectMember", back_populates="project", passive_deletes=True)
    tasks = relationship("Task", back_populates="project", passive_deletes=True)
    threads = relationship("DiscussionThread", back_populates="project", passive_deletes=True)


class ProjectMember(Base):
    """
    Explicit role row. The project creator has implicit owner access
    even without a row here.
    """
    __tablename__ = "project_members"

    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    role = Column(String(20), nullable=False, default=ProjectRole.MEMBER.value)
    added_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    project = relationship("Project", back_populates="members")
    user = relationship("User")
