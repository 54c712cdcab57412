from fastapi import APIRouter, Depends, Response

from synergysphere.constants import ErrorMessages
from synergysphere.enums import ErrorCode
from synergysphere.exceptions import raise_forbidden, raise_not_found
from synergysphere.models import TaskAssignee, User
from synergysphere.schemas import AssigneeCreate
from synergysphere.utils.common import parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.logger import get_logger
from synergysphere.utils.pagination import paginate
from synergysphere.utils.serializers import assignee_to_dict
from synergysphere.utils.task_service import add_assignees, can_manage_task, get_task_for_user

logger = get_logger(__name__)

router = APIRouter(prefix="/tasks/{task_id}/assignees", tags=["Assignees"])

@router.get("")
def list_assignees(
    task_id: str,
    ctx: APIContext = Depends(),
    params: ListParams = Depends()
):
    tid = parse_uuid(task_id, "taskId")
    get_task_for_user(ctx.db, tid, ctx.user.id)

    query = (
        ctx.db.query(TaskAssignee, User)
        .join(User, User.id == TaskAssignee.user_id)
        .filter(TaskAssignee.task_id == tid)
        .order_by(TaskAssignee.assigned_at.asc(), TaskAssignee.user_id.asc())
    )
    return paginate(query, params.pagination, lambda row: assignee_to_dict(*row))

@router.post("", status_code=201)
def assign_users(
    task_id: str,
    data: AssigneeCreate,
    response: Response,
    ctx: APIContext = Depends()
):
    """
    Assigns one or more project members to the task.

    201 when at least one row was inserted, 200 when every candidate was
    already assigned. The summary reports what was skipped and why.
    """
    tid = parse_uuid(task_id, "taskId")
    task, project = get_task_for_user(ctx.db, tid, ctx.user.id)
    if not can_manage_task(ctx.db, project, task, ctx.user.id):
        raise_forbidden()

    result = add_assignees(ctx.db, task, project, data.requested_ids(), actor_id=ctx.user.id)
    if not result["summary"]["inserted"]:
        response.status_code = 200
    return result

@router.delete("/{user_id}", status_code=204)
def unassign_user(
    task_id: str,
    user_id: str,
    ctx: APIContext = Depends()
):
    """
    Allowed for the task creator, project admins and the assignee themself.
    """
    tid = parse_uuid(task_id, "taskId")
    uid = parse_uuid(user_id, "userId")
    task, project = get_task_for_user(ctx.db, tid, ctx.user.id)
    if uid != ctx.user.id and not can_manage_task(ctx.db, project, task, ctx.user.id):
        raise_forbidden()

    deleted = (
        ctx.db.query(TaskAssignee)
        .filter(TaskAssignee.task_id == tid, TaskAssignee.user_id == uid)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise_not_found(ErrorMessages.ASSIGNEE_NOT_FOUND, ErrorCode.ASSIGNEE_NOT_FOUND)

    logger.info(f"User {uid} unassigned from task {tid} by {ctx.user.id}")
    return Response(status_code=204)
