import uuid
from typing import Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Query, Session

from synergysphere.auth.permissions import ensure_can_view
from synergysphere.exceptions import raise_message_not_found, raise_thread_not_found
from synergysphere.models import DiscussionMessage, DiscussionThread, Project, User


def thread_query(db: Session) -> Query:
    """
    Threads joined with their author and a correlated message count.
    Rows unpack as (thread, author, message_count).
    """
    message_count = (
        select(func.count(DiscussionMessage.id))
        .where(DiscussionMessage.thread_id == DiscussionThread.id)
        .correlate(DiscussionThread)
        .scalar_subquery()
        .label("message_count")
    )
    return (
        db.query(DiscussionThread, User, message_count)
        .join(User, User.id == DiscussionThread.created_by)
    )


def get_thread_for_user(db: Session, thread_id: uuid.UUID, user_id: uuid.UUID) -> Tuple[DiscussionThread, Project]:
    """404 for missing threads and for threads in projects the user cannot view."""
    row = (
        db.query(DiscussionThread, Project)
        .join(Project, Project.id == DiscussionThread.project_id)
        .filter(DiscussionThread.id == thread_id)
        .first()
    )
    if not row:
        raise_thread_not_found()
    thread, project = row
    ensure_can_view(db, project, user_id, raise_thread_not_found)
    return thread, project


def get_message_for_user(db: Session, message_id: uuid.UUID, user_id: uuid.UUID) -> Tuple[DiscussionMessage, Project]:
    row = (
        db.query(DiscussionMessage, Project)
        .join(DiscussionThread, DiscussionThread.id == DiscussionMessage.thread_id)
        .join(Project, Project.id == DiscussionThread.project_id)
        .filter(DiscussionMessage.id == message_id)
        .first()
    )
    if not row:
        raise_message_not_found()
    message, project = row
    ensure_can_view(db, project, user_id, raise_message_not_found)
    return message, project
