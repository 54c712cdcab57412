from typing import Optional

from fastapi import APIRouter, Depends, Response

from synergysphere.auth.permissions import ensure_can_modify_authored, require_project_access
from synergysphere.enums import SortOrder
from synergysphere.exceptions import raise_thread_not_found
from synergysphere.models import DiscussionThread
from synergysphere.schemas import ThreadCreate, ThreadUpdate
from synergysphere.utils.common import parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.discussion_service import get_thread_for_user, thread_query
from synergysphere.utils.filters import search_clause
from synergysphere.utils.logger import get_logger
from synergysphere.utils.pagination import order_clause, paginate, resolve_order, resolve_sort
from synergysphere.utils.serializers import thread_to_dict

logger = get_logger(__name__)

router = APIRouter(tags=["Threads"])

THREAD_SORT_COLUMNS = {
    "created_at": DiscussionThread.created_at,
    "updated_at": DiscussionThread.updated_at,
    "title": DiscussionThread.title,
}


def _load_thread(ctx: APIContext, thread_id):
    row = thread_query(ctx.db).filter(DiscussionThread.id == thread_id).first()
    if not row:
        raise_thread_not_found()
    return thread_to_dict(*row)

@router.get("/projects/{project_id}/threads")
def list_threads(
    project_id: str,
    ctx: APIContext = Depends(),
    q: Optional[str] = None,
    params: ListParams = Depends()
):
    """
    Discussion threads of a project, most recently active first.
    Items carry the author's name and email plus the number of messages.
    """
    pid = parse_uuid(project_id, "projectId")
    require_project_access(ctx.db, pid, ctx.user.id)

    sort_column = resolve_sort(params.sort, THREAD_SORT_COLUMNS, "updated_at")
    order = resolve_order(params.order, SortOrder.DESC)

    query = thread_query(ctx.db).filter(DiscussionThread.project_id == pid)
    search = search_clause(q, DiscussionThread.title)
    if search is not None:
        query = query.filter(search)
    query = query.order_by(order_clause(sort_column, order), DiscussionThread.id.asc())

    return paginate(query, params.pagination, lambda row: thread_to_dict(*row))

@router.post("/projects/{project_id}/threads", status_code=201)
def create_thread(
    project_id: str,
    thread_in: ThreadCreate,
    ctx: APIContext = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    require_project_access(ctx.db, pid, ctx.user.id)

    thread = DiscussionThread(project_id=pid, title=thread_in.title, created_by=ctx.user.id)
    ctx.db.add(thread)
    ctx.db.flush()

    logger.info(f"Thread {thread.id} created in project {pid} by {ctx.user.id}")
    return _load_thread(ctx, thread.id)

@router.get("/threads/{thread_id}")
def get_thread(
    thread_id: str,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(thread_id, "threadId")
    get_thread_for_user(ctx.db, tid, ctx.user.id)
    return _load_thread(ctx, tid)

@router.patch("/threads/{thread_id}")
def update_thread(
    thread_id: str,
    thread_in: ThreadUpdate,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(thread_id, "threadId")
    thread, project = get_thread_for_user(ctx.db, tid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, thread.created_by)

    thread.title = thread_in.title
    ctx.db.flush()
    return _load_thread(ctx, tid)

@router.delete("/threads/{thread_id}", status_code=204)
def delete_thread(
    thread_id: str,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(thread_id, "threadId")
    thread, project = get_thread_for_user(ctx.db, tid, ctx.user.id)
    ensure_can_modify_authored(ctx.db, project, ctx.user.id, thread.created_by)

    ctx.db.query(DiscussionThread).filter(DiscussionThread.id == tid).delete(synchronize_session=False)
    logger.info(f"Thread {tid} deleted by {ctx.user.id}")
    return Response(status_code=204)
