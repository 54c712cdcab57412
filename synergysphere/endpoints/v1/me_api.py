from fastapi import APIRouter, Depends
from sqlalchemy import and_

from synergysphere.enums import SortOrder
from synergysphere.models import Project, Task, TaskAssignee
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.filters import MyTaskFilters
from synergysphere.utils.pagination import order_clause, paginate, resolve_order, resolve_sort
from synergysphere.utils.serializers import task_to_dict

from .tasks_api import TASK_SORT_COLUMNS

router = APIRouter(prefix="/me", tags=["Me"])

@router.get("/tasks")
def list_my_tasks(
    ctx: APIContext = Depends(),
    filters: MyTaskFilters = Depends(),
    params: ListParams = Depends()
):
    """
    Tasks assigned to the caller across all projects, soonest due first.
    """
    sort_column = resolve_sort(params.sort, TASK_SORT_COLUMNS, "due_date")
    order = resolve_order(params.order, SortOrder.ASC)

    query = (
        ctx.db.query(Task, Project.name, TaskAssignee.assigned_at)
        .join(
            TaskAssignee,
            and_(TaskAssignee.task_id == Task.id, TaskAssignee.user_id == ctx.user.id),
        )
        .join(Project, Project.id == Task.project_id)
        .filter(*filters.clauses())
        .order_by(order_clause(sort_column, order), Task.id.asc())
    )

    def serialize(row):
        task, project_name, assigned_at = row
        return task_to_dict(task, project_name=project_name, assigned_at=assigned_at)

    return paginate(query, params.pagination, serialize)
