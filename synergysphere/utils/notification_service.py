import uuid
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from synergysphere.enums import NotificationType
from synergysphere.models import DiscussionThread, Notification, Project, Task, TaskAssignee
from synergysphere.utils.logger import get_logger

logger = get_logger(__name__)


def create_notification(
    db: Session,
    user_id: uuid.UUID,
    type: NotificationType,
    payload: Optional[dict] = None,
    project_id: Optional[uuid.UUID] = None,
    task_id: Optional[uuid.UUID] = None,
    actor_id: Optional[uuid.UUID] = None,
) -> Optional[Notification]:
    """
    Queues a notification on the current session.
    Users are never notified about their own actions.
    """
    if actor_id is not None and actor_id == user_id:
        return None

    notification = Notification(
        user_id=user_id,
        type=type.value,
        payload=payload or {},
        project_id=project_id,
        task_id=task_id,
        actor_id=actor_id,
    )
    db.add(notification)
    return notification


def notify_task_assigned(db: Session, task: Task, user_ids: Iterable[uuid.UUID], actor_id: uuid.UUID):
    for user_id in user_ids:
        create_notification(
            db,
            user_id,
            NotificationType.TASK_ASSIGNED,
            {"task_title": task.title},
            project_id=task.project_id,
            task_id=task.id,
            actor_id=actor_id,
        )


def notify_member_added(db: Session, project: Project, user_id: uuid.UUID, role: str, actor_id: uuid.UUID):
    create_notification(
        db,
        user_id,
        NotificationType.PROJECT_MEMBER_ADDED,
        {"project_name": project.name, "role": role},
        project_id=project.id,
        actor_id=actor_id,
    )


def notify_task_comment(db: Session, task: Task, comment_id: uuid.UUID, actor_id: uuid.UUID):
    """Notifies the task creator and every assignee."""
    recipients = {task.created_by}
    recipients.update(
        row.user_id for row in db.query(TaskAssignee.user_id).filter(TaskAssignee.task_id == task.id)
    )
    for user_id in recipients:
        create_notification(
            db,
            user_id,
            NotificationType.TASK_COMMENT,
            {"task_title": task.title, "comment_id": str(comment_id)},
            project_id=task.project_id,
            task_id=task.id,
            actor_id=actor_id,
        )


def notify_thread_message(db: Session, thread: DiscussionThread, message_id: uuid.UUID, actor_id: uuid.UUID):
    create_notification(
        db,
        thread.created_by,
        NotificationType.THREAD_MESSAGE,
        {"thread_title": thread.title, "thread_id": str(thread.id), "message_id": str(message_id)},
        project_id=thread.project_id,
        actor_id=actor_id,
    )
