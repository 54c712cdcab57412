import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from synergysphere.auth.permissions import ensure_can_modify_authored, ensure_can_view
from synergysphere.constants import ErrorMessages
from synergysphere.exceptions import raise_bad_request, raise_comment_not_found
from synergysphere.models import Project, Task, TaskComment, User
from synergysphere.schemas import CommentCreate, CommentUpdate
from synergysphere.utils.common import parse_optional_uuid, parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.logger import get_logger
from synergysphere.utils.notification_service import notify_task_comment
from synergysphere.utils.pagination import paginate
from synergysphere.utils.serializers import comment_to_dict
from synergysphere.utils.task_service import get_task_for_user

logger = get_logger(__name__)

router = APIRouter(tags=["Comments"])


def _get_comment_for_user(db: Session, comment_id: uuid.UUID, user_id: uuid.UUID):
    row = (
        db.query(TaskComment, Project)
        .join(Task, Task.id == TaskComment.task_id)
        .join(Project, Project.id == Task.project_id)
        .filter(TaskComment.id == comment_id)
        .first()
    )
    if not row:
        raise_comment_not_found()
    comment, project = row
    ensure_can_view(db, project, user_id, raise_comment_not_found)
    return comment, project

@router.get("/tasks/{task_id}/comments")
def list_comments(
    task_id: str,
    ctx: APIContext = Depends(),
    parentId: Optional[str] = None,
    params: ListParams = Depends()
):
    """
    Comments of a task, oldest first. `parentId` narrows to the replies of one comment.
    """
    tid = parse_uuid(task_id, "taskId")
    parent_id = parse_optional_uuid(parentId, "parentId")
    get_task_for_user(ctx.db, tid, ctx.user.id)

    query = (
        ctx.db.query(TaskComment, User)
        .join(User, User.id == TaskComment.author_id)
        .filter(TaskComment.task_id == tid)
    )
    if parent_id:
        query = query.filter(TaskComment.parent_comment_id == parent_id)
    query = query.order_by(TaskComment.created_at.asc(), TaskComment.id.asc())

    return paginate(query, params.pagination, lambda row: comment_to_dict(*row))

@router.post("/tasks/{task_id}/comments", status_code=201)
def create_comment(
    task_id: str,
    comment_in: CommentCreate,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(task_id, "taskId")
    parent_id = parse_optional_uuid(comment_in.parent_comment_id, "parent_comment_id")
    task, _ = get_task_for_user(ctx.db, tid, ctx.user.id)
    author = ctx.account()

    if parent_id:
        parent = (
            ctx.db.query(TaskComment.id)
            .filter(TaskComment.id == parent_id, TaskComment.task_id == tid)
            .first()
        )
        if not parent:
            raise_bad_request(ErrorMessages.PARENT_COMMENT_NOT_FOUND)

    comment = TaskComment(
        task_id=tid,
        author_id=ctx.user.id,
        body=comment_in.body,
        parent_comment_id=parent_id,
    )
    ctx.db.add(comment)
    ctx.db.flush()
    ctx.db.refresh(comment)

    notify_task_comment(ctx.db, task, comment.id, actor_id=ctx.user.id)
    return comment_to_dict(comment, author)

@router.patch("/task-comments/{comment_id}")
def update_comment(
    comment_id: str,
    comment_in: CommentUpdate,
    ctx: APIContext = Depends()
):
    cid = parse_uuid(comment_id, "commentId")
    comment, project = _get_comment_for_user(ctx.db, cid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, comment.author_id)

    comment.body = comment_in.body
    ctx.db.flush()
    ctx.db.refresh(comment)
    return comment_to_dict(comment, ctx.db.get(User, comment.author_id))

@router.delete("/task-comments/{comment_id}", status_code=204)
def delete_comment(
    comment_id: str,
    ctx: APIContext = Depends()
):
    cid = parse_uuid(comment_id, "commentId")
    comment, project = _get_comment_for_user(ctx.db, cid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, comment.author_id)

    ctx.db.query(TaskComment).filter(TaskComment.id == cid).delete(synchronize_session=False)
    logger.info(f"Comment {cid} deleted by {ctx.user.id}")
    return Response(status_code=204)
