import uuid

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from synergysphere.auth.permissions import can_manage_project, require_project_access
from synergysphere.constants import ErrorMessages
from synergysphere.enums import ErrorCode, ProjectRole
from synergysphere.exceptions import raise_bad_request, raise_forbidden, raise_member_not_found
from synergysphere.models import Project, ProjectMember, User
from synergysphere.schemas import MemberCreate, MemberUpdate
from synergysphere.utils.common import get_object_or_404, parse_uuid
from synergysphere.utils.deps import APIContext, ListParams
from synergysphere.utils.logger import get_logger
from synergysphere.utils.notification_service import notify_member_added
from synergysphere.utils.pagination import paginate
from synergysphere.utils.serializers import member_to_dict

logger = get_logger(__name__)

router = APIRouter(prefix="/projects/{project_id}/members", tags=["Members"])


def _get_member_row(db: Session, project_id: uuid.UUID, user_id: uuid.UUID):
    return (
        db.query(ProjectMember, User)
        .join(User, User.id == ProjectMember.user_id)
        .filter(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
        .first()
    )


def _check_owner_grant(project: Project, role: ProjectRole, user_id: uuid.UUID):
    if role == ProjectRole.OWNER and project.created_by != user_id:
        raise_forbidden(ErrorMessages.ONLY_CREATOR_GRANTS_OWNER)


@router.get("")
def list_members(
    project_id: str,
    ctx: APIContext = Depends(),
    params: ListParams = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    require_project_access(ctx.db, pid, ctx.user.id)

    query = (
        ctx.db.query(ProjectMember, User)
        .join(User, User.id == ProjectMember.user_id)
        .filter(ProjectMember.project_id == pid)
        .order_by(ProjectMember.added_at.asc(), ProjectMember.user_id.asc())
    )
    return paginate(query, params.pagination, lambda row: member_to_dict(*row))

@router.post("", status_code=201)
def add_member(
    project_id: str,
    member_in: MemberCreate,
    ctx: APIContext = Depends()
):
    """
    Adds a user to the project or changes the role of an existing member.
    The added user is notified.
    """
    pid = parse_uuid(project_id, "projectId")
    if not member_in.user_id:
        raise_bad_request("userId is required")
    uid = parse_uuid(member_in.user_id, "userId")

    project = require_project_access(ctx.db, pid, ctx.user.id, ProjectRole.ADMIN)
    _check_owner_grant(project, member_in.role, ctx.user.id)

    user = get_object_or_404(ctx.db, User, uid, ErrorMessages.USER_NOT_FOUND, ErrorCode.USER_NOT_FOUND)

    member = (
        ctx.db.query(ProjectMember)
        .filter(ProjectMember.project_id == pid, ProjectMember.user_id == uid)
        .first()
    )
    if member:
        member.role = member_in.role.value
    else:
        member = ProjectMember(project_id=pid, user_id=uid, role=member_in.role.value)
        ctx.db.add(member)
    ctx.db.flush()
    ctx.db.refresh(member)

    notify_member_added(ctx.db, project, uid, member.role, actor_id=ctx.user.id)
    logger.info(f"User {uid} added to project {pid} as {member.role}")
    return member_to_dict(member, user)

@router.get("/me")
def get_my_membership(
    project_id: str,
    ctx: APIContext = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    require_project_access(ctx.db, pid, ctx.user.id)

    row = _get_member_row(ctx.db, pid, ctx.user.id)
    if not row:
        raise_member_not_found(ErrorMessages.NOT_A_MEMBER)
    return member_to_dict(*row)

@router.get("/{user_id}")
def get_member(
    project_id: str,
    user_id: str,
    ctx: APIContext = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    uid = parse_uuid(user_id, "userId")
    require_project_access(ctx.db, pid, ctx.user.id)

    row = _get_member_row(ctx.db, pid, uid)
    if not row:
        raise_member_not_found()
    return member_to_dict(*row)

@router.patch("/{user_id}")
def update_member(
    project_id: str,
    user_id: str,
    member_in: MemberUpdate,
    ctx: APIContext = Depends()
):
    pid = parse_uuid(project_id, "projectId")
    uid = parse_uuid(user_id, "userId")
    project = require_project_access(ctx.db, pid, ctx.user.id, ProjectRole.ADMIN)
    _check_owner_grant(project, member_in.role, ctx.user.id)

    row = _get_member_row(ctx.db, pid, uid)
    if not row:
        raise_member_not_found()
    member, user = row

    member.role = member_in.role.value
    ctx.db.flush()
    return member_to_dict(member, user)

@router.delete("/{user_id}", status_code=204)
def remove_member(
    project_id: str,
    user_id: str,
    ctx: APIContext = Depends()
):
    """
    Admins may remove anyone; any member may remove themselves.
    """
    pid = parse_uuid(project_id, "projectId")
    uid = parse_uuid(user_id, "userId")
    project = require_project_access(ctx.db, pid, ctx.user.id)

    if uid != ctx.user.id and not can_manage_project(ctx.db, project, ctx.user.id):
        raise_forbidden()

    deleted = (
        ctx.db.query(ProjectMember)
        .filter(ProjectMember.project_id == pid, ProjectMember.user_id == uid)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise_member_not_found()

    logger.info(f"User {uid} removed from project {pid} by {ctx.user.id}")
    return Response(status_code=204)
