from typing import Optional

from synergysphere.models import (
    DiscussionMessage, DiscussionThread, Notification, Project, ProjectMember,
    Task, TaskAssignee, TaskComment, User,
)
from synergysphere.schemas import (
    CommentResponse, MemberResponse, MessageResponse, NotificationResponse,
    ProjectResponse, TaskResponse, ThreadResponse, UserResponse,
)


def user_to_dict(user: User) -> dict:
    return UserResponse.model_validate(user).model_dump()


def _user_fields(user: Optional[User]) -> dict:
    return {
        "full_name": user.full_name if user else None,
        "email": user.email if user else None,
        "avatar_url": user.avatar_url if user else None,
    }


def project_to_dict(project: Project, role: Optional[str] = None) -> dict:
    data = ProjectResponse.model_validate(project).model_dump()
    if role is not None:
        data["role"] = role
    return data


def member_to_dict(member: ProjectMember, user: Optional[User] = None) -> dict:
    data = MemberResponse.model_validate(member).model_dump()
    if user is not None:
        data.update(_user_fields(user))
    return data


def task_to_dict(task: Task, **extra) -> dict:
    data = TaskResponse.model_validate(task).model_dump()
    data.update(extra)
    return data


def assignee_to_dict(assignee: TaskAssignee, user: User) -> dict:
    return {
        "task_id": assignee.task_id,
        "user_id": assignee.user_id,
        "assigned_at": assignee.assigned_at,
        **_user_fields(user),
    }


def comment_to_dict(comment: TaskComment, author: Optional[User] = None) -> dict:
    data = CommentResponse.model_validate(comment).model_dump()
    if author is not None:
        data.update(_user_fields(author))
    return data


def thread_to_dict(thread: DiscussionThread, author: Optional[User] = None, message_count: Optional[int] = None) -> dict:
    data = ThreadResponse.model_validate(thread).model_dump()
    if author is not None:
        data["author_name"] = author.full_name
        data["author_email"] = author.email
    if message_count is not None:
        data["message_count"] = int(message_count)
    return data


def message_to_dict(message: DiscussionMessage, author: Optional[User] = None) -> dict:
    data = MessageResponse.model_validate(message).model_dump()
    if author is not None:
        data.update(_user_fields(author))
    return data


def notification_to_dict(notification: Notification, actor: Optional[User] = None) -> dict:
    data = NotificationResponse.model_validate(notification).model_dump()
    data["actor_name"] = actor.full_name if actor else None
    data["actor_email"] = actor.email if actor else None
    data["actor_avatar"] = actor.avatar_url if actor else None
    return data
