from typing import Optional

from fastapi import APIRouter, Depends

from synergysphere.exceptions import raise_notification_not_found
from synergysphere.models import Notification, User
from synergysphere.schemas import NotificationCount, ReadAllRequest
from synergysphere.utils.common import parse_optional_uuid, parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.filters import NotificationFilters
from synergysphere.utils.pagination import paginate
from synergysphere.utils.serializers import notification_to_dict

router = APIRouter(prefix="/notifications", tags=["Notifications"])

@router.get("")
def list_notifications(
    ctx: APIContext = Depends(),
    filters: NotificationFilters = Depends(),
    params: ListParams = Depends()
):
    """
    The caller's notifications, newest first, with the actor's public fields.
    """
    query = (
        ctx.db.query(Notification, User)
        .outerjoin(User, User.id == Notification.actor_id)
        .filter(Notification.user_id == ctx.user.id, *filters.clauses())
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return paginate(query, params.pagination, lambda row: notification_to_dict(*row))

@router.get("/unread-count", response_model=NotificationCount)
def unread_count(ctx: APIContext = Depends()):
    count = (
        ctx.db.query(Notification)
        .filter(Notification.user_id == ctx.user.id, Notification.is_read.is_(False))
        .count()
    )
    return NotificationCount(unread_count=count)

@router.patch("/{notification_id}/read")
def mark_read(
    notification_id: str,
    ctx: APIContext = Depends()
):
    nid = parse_uuid(notification_id, "notificationId")
    notification = (
        ctx.db.query(Notification)
        .filter(Notification.id == nid, Notification.user_id == ctx.user.id)
        .first()
    )
    if not notification:
        raise_notification_not_found()

    notification.is_read = True
    ctx.db.flush()
    actor = ctx.db.get(User, notification.actor_id) if notification.actor_id else None
    return notification_to_dict(notification, actor)

@router.post("/read-all")
def mark_all_read(
    data: Optional[ReadAllRequest] = None,
    ctx: APIContext = Depends()
):
    """
    Marks the caller's unread notifications as read, optionally narrowed
    by type, project or task. Returns how many rows changed.
    """
    data = data or ReadAllRequest()
    query = ctx.db.query(Notification).filter(
        Notification.user_id == ctx.user.id,
        Notification.is_read.is_(False),
    )
    if data.type:
        query = query.filter(Notification.type == data.type)
    project_id = parse_optional_uuid(data.project_id, "project_id")
    if project_id:
        query = query.filter(Notification.project_id == project_id)
    task_id = parse_optional_uuid(data.task_id, "task_id")
    if task_id:
        query = query.filter(Notification.task_id == task_id)

    updated = query.update({Notification.is_read: True}, synchronize_session=False)
    return {"updated": updated}
