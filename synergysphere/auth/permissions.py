import uuid
from typing import Optional

from sqlalchemy.orm import Session

from synergysphere.enums import ProjectRole
from synergysphere.exceptions import raise_forbidden, raise_project_not_found
from synergysphere.models import Project, ProjectMember


def get_project_role(db: Session, project: Project, user_id: uuid.UUID) -> Optional[ProjectRole]:
    """
    Resolves the effective role of a user on a project.

    The creator is always treated as owner, even without a member row.
    Returns None for users with no access at all.
    """
    if project.created_by == user_id:
        return ProjectRole.OWNER

    member = (
        db.query(ProjectMember)
        .filter(ProjectMember.project_id == project.id, ProjectMember.user_id == user_id)
        .first()
    )
    if not member:
        return None
    try:
        return ProjectRole(member.role)
    except ValueError:
        return None


def has_project_role(
    db: Session,
    project: Project,
    user_id: uuid.UUID,
    required_role: ProjectRole = ProjectRole.VIEWER,
) -> bool:
    """
    Single capability check used by every router.
    Roles are ranked viewer < member < admin < owner.
    """
    role = get_project_role(db, project, user_id)
    return role is not None and role.satisfies(required_role)


def can_view_project(db: Session, project: Project, user_id: uuid.UUID) -> bool:
    """Creator or any member row, whatever its role."""
    return has_project_role(db, project, user_id, ProjectRole.VIEWER)


def can_manage_project(db: Session, project: Project, user_id: uuid.UUID) -> bool:
    """Creator or a member with the owner/admin role."""
    return has_project_role(db, project, user_id, ProjectRole.ADMIN)


def can_modify_authored(db: Session, project: Project, user_id: uuid.UUID, author_id: uuid.UUID) -> bool:
    """
    Authors may always edit or delete their own content;
    everyone else needs manage rights on the project.
    """
    if author_id == user_id:
        return True
    return can_manage_project(db, project, user_id)


def require_project_access(
    db: Session,
    project_id: uuid.UUID,
    user_id: uuid.UUID,
    required_role: ProjectRole = ProjectRole.VIEWER,
) -> Project:
    """
    Loads a project and enforces a minimum role on it.

    Raises:
        404 if the project does not exist or the user cannot view it
            (existence is not confirmed to non-members)
        403 if the user can view it but lacks the required role
    """
    project = db.query(Project).filter(Project.id == project_id).first()
    if not project:
        raise_project_not_found()

    role = get_project_role(db, project, user_id)
    if role is None:
        raise_project_not_found()
    if not role.satisfies(required_role):
        raise_forbidden()

    return project


def ensure_can_view(db: Session, project: Project, user_id: uuid.UUID, raise_missing):
    """
    Hides a sub-entity (task, thread, comment...) from users who cannot see its project.
    `raise_missing` is the not-found helper of the sub-entity.
    """
    if not can_view_project(db, project, user_id):
        raise_missing()


def ensure_can_modify_authored(db: Session, project: Project, user_id: uuid.UUID, author_id: uuid.UUID):
    if not can_modify_authored(db, project, user_id, author_id):
        raise_forbidden()
