from fastapi import APIRouter, Depends, Response
from sqlalchemy import and_, or_

from synergysphere.auth.permissions import get_project_role, require_project_access
from synergysphere.constants import ErrorMessages
from synergysphere.enums import ProjectRole, SortOrder
from synergysphere.exceptions import raise_bad_request, raise_project_not_found
from synergysphere.models import Project, ProjectMember
from synergysphere.schemas import ProjectCreate, ProjectUpdate
from synergysphere.utils.common import parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.filters import ProjectFilters
from synergysphere.utils.logger import get_logger
from synergysphere.utils.pagination import order_clause, paginate, resolve_order, resolve_sort
from synergysphere.utils.serializers import project_to_dict

logger = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])

PROJECT_SORT_COLUMNS = {
    "created_at": Project.created_at,
    "updated_at": Project.updated_at,
    "name": Project.name,
    "status": Project.status,
}

@router.get("")
def list_projects(
    ctx: APIContext = Depends(),
    filters: ProjectFilters = Depends(),
    params: ListParams = Depends()
):
    """
    Lists the projects the user created or is a member of.
    Each item carries the caller's role on it.
    """
    user_id = ctx.user.id
    sort_column = resolve_sort(params.sort, PROJECT_SORT_COLUMNS, "created_at")
    order = resolve_order(params.order, SortOrder.DESC)

    query = (
        ctx.db.query(Project, ProjectMember.role)
        .outerjoin(
            ProjectMember,
            and_(ProjectMember.project_id == Project.id, ProjectMember.user_id == user_id),
        )
        .filter(or_(Project.created_by == user_id, ProjectMember.user_id.isnot(None)))
        .filter(*filters.clauses())
        .order_by(order_clause(sort_column, order), Project.id.asc())
    )

    def serialize(row):
        project, member_role = row
        role = ProjectRole.OWNER.value if project.created_by == user_id else member_role
        return project_to_dict(project, role)

    return paginate(query, params.pagination, serialize)

@router.post("", status_code=201)
def create_project(
    project_in: ProjectCreate,
    ctx: APIContext = Depends()
):
    owner = ctx.account()
    project = Project(
        created_by=owner.id,
        name=project_in.name,
        description=project_in.description,
        status=project_in.status.value,
    )
    ctx.db.add(project)
    ctx.db.flush()
    ctx.db.refresh(project)

    logger.info(f"Project {project.id} created by {ctx.user.id}")
    return project_to_dict(project)

@router.get("/{project_id}")
def get_project(
    project_id: str,
    ctx: APIContext = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    project = require_project_access(ctx.db, pid, ctx.user.id)
    role = get_project_role(ctx.db, project, ctx.user.id)
    return project_to_dict(project, role.value)

@router.patch("/{project_id}")
def update_project(
    project_id: str,
    project_in: ProjectUpdate,
    ctx: APIContext = Depends()
):
    """
    Partial update, restricted to the project creator.
    Anyone else gets a 404 whether or not the project exists.
    """
    pid = parse_uuid(project_id, "projectId")
    updates = project_in.model_dump(exclude_unset=True)
    if not updates:
        raise_bad_request(ErrorMessages.NO_FIELDS_TO_UPDATE)

    project = (
        ctx.db.query(Project)
        .filter(Project.id == pid, Project.created_by == ctx.user.id)
        .first()
    )
    if not project:
        raise_project_not_found()

    for field, value in updates.items():
        setattr(project, field, getattr(value, "value", value))
    ctx.db.flush()
    ctx.db.refresh(project)
    return project_to_dict(project, ProjectRole.OWNER.value)

@router.delete("/{project_id}", status_code=204)
def delete_project(
    project_id: str,
    ctx: APIContext = Depends()
):
    """
    Hard delete, creator only. Members, tasks and threads go with it (FK cascade).
    """
    pid = parse_uuid(project_id, "projectId")
    deleted = (
        ctx.db.query(Project)
        .filter(Project.id == pid, Project.created_by == ctx.user.id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise_project_not_found()

    logger.info(f"Project {pid} deleted by {ctx.user.id}")
    return Response(status_code=204)
