from typing import Optional

from fastapi import APIRouter, Depends, Response

from synergysphere.auth.permissions import ensure_can_modify_authored
from synergysphere.constants import ErrorMessages
from synergysphere.enums import SortOrder
from synergysphere.exceptions import raise_bad_request
from synergysphere.models import DiscussionMessage, User
from synergysphere.schemas import MessageCreate, MessageUpdate
from synergysphere.utils.common import parse_optional_uuid, parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.discussion_service import get_message_for_user, get_thread_for_user
from synergysphere.utils.logger import get_logger
from synergysphere.utils.notification_service import notify_thread_message
from synergysphere.utils.pagination import order_clause, paginate, resolve_order
from synergysphere.utils.serializers import message_to_dict

logger = get_logger(__name__)

router = APIRouter(tags=["Messages"])

@router.get("/threads/{thread_id}/messages")
def list_messages(
    thread_id: str,
    ctx: APIContext = Depends(),
    parentId: Optional[str] = None,
    params: ListParams = Depends()
):
    """
    Messages of a thread in chronological order (`order=desc` reverses it).
    """
    tid = parse_uuid(thread_id, "threadId")
    parent_id = parse_optional_uuid(parentId, "parentId")
    get_thread_for_user(ctx.db, tid, ctx.user.id)

    order = resolve_order(params.order, SortOrder.ASC)
    query = (
        ctx.db.query(DiscussionMessage, User)
        .join(User, User.id == DiscussionMessage.author_id)
        .filter(DiscussionMessage.thread_id == tid)
    )
    if parent_id:
        query = query.filter(DiscussionMessage.parent_message_id == parent_id)
    query = query.order_by(
        order_clause(DiscussionMessage.created_at, order),
        order_clause(DiscussionMessage.id, order),
    )

    return paginate(query, params.pagination, lambda row: message_to_dict(*row))

@router.post("/threads/{thread_id}/messages", status_code=201)
def post_message(
    thread_id: str,
    message_in: MessageCreate,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(thread_id, "threadId")
    parent_id = parse_optional_uuid(message_in.parent_message_id, "parent_message_id")
    thread, _ = get_thread_for_user(ctx.db, tid, ctx.user.id)
    author = ctx.account()

    if parent_id:
        parent = (
            ctx.db.query(DiscussionMessage.id)
            .filter(DiscussionMessage.id == parent_id, DiscussionMessage.thread_id == tid)
            .first()
        )
        if not parent:
            raise_bad_request(ErrorMessages.PARENT_MESSAGE_NOT_FOUND)

    message = DiscussionMessage(
        thread_id=tid,
        author_id=ctx.user.id,
        body=message_in.body,
        parent_message_id=parent_id,
    )
    ctx.db.add(message)
    ctx.db.flush()
    ctx.db.refresh(message)

    notify_thread_message(ctx.db, thread, message.id, actor_id=ctx.user.id)
    return message_to_dict(message, author)

@router.patch("/messages/{message_id}")
def update_message(
    message_id: str,
    message_in: MessageUpdate,
    ctx: APIContext = Depends()
):
    mid = parse_uuid(message_id, "messageId")
    message, project = get_message_for_user(ctx.db, mid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, message.author_id)

    message.body = message_in.body
    ctx.db.flush()
    ctx.db.refresh(message)
    return message_to_dict(message, ctx.db.get(User, message.author_id))

@router.delete("/messages/{message_id}", status_code=204)
def delete_message(
    message_id: str,
    ctx: APIContext = Depends()
):
    mid = parse_uuid(message_id, "messageId")
    message, project = get_message_for_user(ctx.db, mid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, message.author_id)

    ctx.db.query(DiscussionMessage).filter(DiscussionMessage.id == mid).delete(synchronize_session=False)
    logger.info(f"Message {mid} deleted by {ctx.user.id}")
    return Response(status_code=204)
