from fastapi import APIRouter, Depends, Response

from synergysphere.auth.permissions import require_project_access
from synergysphere.constants import ErrorMessages
from synergysphere.enums import SortOrder
from synergysphere.exceptions import raise_bad_request, raise_forbidden
from synergysphere.models import Task
from synergysphere.schemas import TaskCreate, TaskUpdate
from synergysphere.utils.common import parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.filters import TaskFilters
from synergysphere.utils.logger import get_logger
from synergysphere.utils.pagination import order_clause, paginate, resolve_order, resolve_sort
from synergysphere.utils.serializers import task_to_dict
from synergysphere.utils.task_service import (
    can_manage_task, create_task, get_task_for_user, list_task_assignees,
)

logger = get_logger(__name__)

router = APIRouter(tags=["Tasks"])

TASK_SORT_COLUMNS = {
    "created_at": Task.created_at,
    "updated_at": Task.updated_at,
    "due_date": Task.due_date,
    "title": Task.title,
    "status": Task.status,
}

@router.get("/projects/{project_id}/tasks")
def list_project_tasks(
    project_id: str,
    ctx: APIContext = Depends(),
    filters: TaskFilters = Depends(),
    params: ListParams = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    require_project_access(ctx.db, pid, ctx.user.id)

    sort_column = resolve_sort(params.sort, TASK_SORT_COLUMNS, "created_at")
    order = resolve_order(params.order, SortOrder.DESC)

    query = (
        ctx.db.query(Task)
        .filter(Task.project_id == pid, *filters.clauses())
        .order_by(order_clause(sort_column, order), Task.id.asc())
    )
    return paginate(query, params.pagination, task_to_dict)

@router.post("/projects/{project_id}/tasks", status_code=201)
def create_project_task(
    project_id: str,
    task_in: TaskCreate,
    ctx: APIContext = Depends()
):
    """
    Creates a task, optionally with its initial assignees.
    Any invalid or non-member assignee rejects the whole request.
    """
    pid = parse_uuid(project_id, "projectId")
    project = require_project_access(ctx.db, pid, ctx.user.id)

    task = create_task(ctx.db, project, ctx.user.id, task_in)
    logger.info(f"Task {task.id} created in project {pid} by {ctx.user.id}")
    return task_to_dict(task, assignees=list_task_assignees(ctx.db, task.id))

@router.get("/tasks/{task_id}")
def get_task(
    task_id: str,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(task_id, "taskId")
    task, _ = get_task_for_user(ctx.db, tid, ctx.user.id)
    return task_to_dict(task, assignees=list_task_assignees(ctx.db, task.id))

@router.patch("/tasks/{task_id}")
def update_task(
    task_id: str,
    task_in: TaskUpdate,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(task_id, "taskId")
    updates = task_in.model_dump(exclude_unset=True)
    if not updates:
        raise_bad_request(ErrorMessages.NO_FIELDS_TO_UPDATE)

    task, _ = get_task_for_user(ctx.db, tid, ctx.user.id)
    for field, value in updates.items():
        setattr(task, field, getattr(value, "value", value))
    ctx.db.flush()
    ctx.db.refresh(task)
    return task_to_dict(task)

@router.delete("/tasks/{task_id}", status_code=204)
def delete_task(
    task_id: str,
    ctx: APIContext = Depends()
):
    tid = parse_uuid(task_id, "taskId")
    task, project = get_task_for_user(ctx.db, tid, ctx.user.id)
    if not can_manage_task(ctx.db, project, task, ctx.user.id):
        raise_forbidden()

    ctx.db.query(Task).filter(Task.id == task.id).delete(synchronize_session=False)
    logger.info(f"Task {tid} deleted by {ctx.user.id}")
    return Response(status_code=204)
