import uuid
from typing import Iterable, List, Set, Tuple

from sqlalchemy.orm import Session

from synergysphere.auth.permissions import can_manage_project, ensure_can_view
from synergysphere.constants import ErrorMessages
from synergysphere.exceptions import (
    raise_bad_request, raise_not_project_members, raise_task_not_found,
)
from synergysphere.models import Project, ProjectMember, Task, TaskAssignee, User
from synergysphere.schemas import TaskCreate
from synergysphere.utils.common import is_uuid, unique_ids
from synergysphere.utils.logger import get_logger
from synergysphere.utils.notification_service import notify_task_assigned
from synergysphere.utils.serializers import assignee_to_dict

logger = get_logger(__name__)


def get_task_for_user(db: Session, task_id: uuid.UUID, user_id: uuid.UUID) -> Tuple[Task, Project]:
    """
    Loads a task with its project. Missing tasks and tasks in projects
    the user cannot view both surface as 404.
    """
    row = (
        db.query(Task, Project)
        .join(Project, Project.id == Task.project_id)
        .filter(Task.id == task_id)
        .first()
    )
    if not row:
        raise_task_not_found()
    task, project = row
    ensure_can_view(db, project, user_id, raise_task_not_found)
    return task, project


def filter_project_members(db: Session, project: Project, candidate_ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
    """
    Keeps only ids that belong to the project: explicit members plus the creator.
    """
    candidates = set(candidate_ids)
    if not candidates:
        return set()

    members = {
        row.user_id
        for row in db.query(ProjectMember.user_id).filter(
            ProjectMember.project_id == project.id,
            ProjectMember.user_id.in_(candidates),
        )
    }
    if project.created_by in candidates:
        members.add(project.created_by)
    return members


def can_manage_task(db: Session, project: Project, task: Task, user_id: uuid.UUID) -> bool:
    """Task creator or project owner/admin."""
    if task.created_by == user_id:
        return True
    return can_manage_project(db, project, user_id)


def create_task(db: Session, project: Project, user_id: uuid.UUID, task_in: TaskCreate) -> Task:
    """
    Creates a task and, optionally, its initial assignees.

    Runs inside the request transaction: if any assignee is invalid or not a
    project member nothing is written.
    """
    requested = unique_ids(task_in.assignee_ids)
    invalid = [value for value in requested if not is_uuid(value)]
    if invalid:
        raise_bad_request("Invalid assignee_ids", {"invalid": invalid})

    assignee_ids = [uuid.UUID(value) for value in requested]
    members = filter_project_members(db, project, assignee_ids)
    not_members = [str(value) for value in assignee_ids if value not in members]
    if not_members:
        raise_bad_request("One or more users are not project members", {"notMembers": not_members})

    task = Task(
        project_id=project.id,
        title=task_in.title,
        description=task_in.description,
        status=task_in.status.value,
        due_date=task_in.due_date,
        is_archived=task_in.is_archived,
        created_by=user_id,
    )
    db.add(task)
    db.flush()

    for assignee_id in assignee_ids:
        db.add(TaskAssignee(task_id=task.id, user_id=assignee_id))
    if assignee_ids:
        db.flush()
        notify_task_assigned(db, task, assignee_ids, actor_id=user_id)

    db.refresh(task)
    return task


def list_task_assignees(db: Session, task_id: uuid.UUID) -> List[dict]:
    rows = (
        db.query(TaskAssignee, User)
        .join(User, User.id == TaskAssignee.user_id)
        .filter(TaskAssignee.task_id == task_id)
        .order_by(TaskAssignee.assigned_at.asc(), TaskAssignee.user_id.asc())
        .all()
    )
    return [assignee_to_dict(assignee, user) for assignee, user in rows]


def add_assignees(db: Session, task: Task, project: Project, raw_ids: list, actor_id: uuid.UUID) -> dict:
    """
    Best-effort batch: malformed ids, non-members and existing assignees are
    skipped and reported in the summary instead of failing the whole request.

    Returns {"added": [...], "summary": {...}}.
    Raises 400 only when nothing usable was supplied.
    """
    ids = unique_ids(raw_ids)
    if not ids:
        raise_bad_request(ErrorMessages.ASSIGNEE_IDS_REQUIRED)

    invalid = [value for value in ids if not is_uuid(value)]
    candidates = [uuid.UUID(value) for value in ids if is_uuid(value)]
    if not candidates:
        raise_bad_request(ErrorMessages.NO_VALID_UUIDS, {"invalid": invalid})

    members = filter_project_members(db, project, candidates)
    not_members = [value for value in candidates if value not in members]
    if not members:
        raise_not_project_members({
            "invalid": invalid,
            "notMembers": [str(value) for value in not_members],
        })

    already = {
        row.user_id
        for row in db.query(TaskAssignee.user_id).filter(
            TaskAssignee.task_id == task.id,
            TaskAssignee.user_id.in_(members),
        )
    }
    to_insert = [value for value in candidates if value in members and value not in already]

    for user_id in to_insert:
        db.add(TaskAssignee(task_id=task.id, user_id=user_id))
    db.flush()

    if to_insert:
        notify_task_assigned(db, task, to_insert, actor_id=actor_id)

    inserted = set(to_insert)
    added = [row for row in list_task_assignees(db, task.id) if row["user_id"] in inserted]

    summary = {
        "requested": len(ids),
        "invalid": len(invalid),
        "notMembers": len(not_members),
        "alreadyAssigned": len(already),
        "inserted": len(added),
    }
    logger.info(f"Assignees for task {task.id}: {summary}")
    return {"added": added, "summary": summary}
