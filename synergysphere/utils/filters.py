"""
Parameter objects turning optional list filters into SQLAlchemy clauses.

Each class doubles as a FastAPI dependency (its constructor arguments are
query parameters) and exposes `clauses()`, which only builds expressions and
never touches the database.
"""
from datetime import date
from typing import Optional

from sqlalchemy import or_

from synergysphere.models import Notification, Project, Task, User
from synergysphere.utils.common import parse_optional_uuid


def search_clause(term: Optional[str], *columns):
    """
    Case-insensitive LIKE of `term` against any of `columns`.
    Returns None for a blank term.
    """
    if not term or not term.strip():
        return None
    pattern = f"%{term.strip()}%"
    return or_(*[column.ilike(pattern) for column in columns])


def parse_bool_flag(value: Optional[str]) -> Optional[bool]:
    """None when absent; True only for the literal "true"."""
    if value is None:
        return None
    return str(value).strip().lower() == "true"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ProjectFilters:
    def __init__(self, q: Optional[str] = None, status: Optional[str] = None):
        self.q = q
        self.status = _clean(status)

    def clauses(self) -> list:
        clauses = []
        search = search_clause(self.q, Project.name, Project.description)
        if search is not None:
            clauses.append(search)
        if self.status:
            clauses.append(Project.status == self.status)
        return clauses


class TaskFilters:
    def __init__(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        is_archived: Optional[str] = None,
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
    ):
        self.q = q
        self.status = _clean(status)
        self.is_archived = parse_bool_flag(is_archived)
        self.due_from = due_from
        self.due_to = due_to

    def clauses(self) -> list:
        clauses = []
        search = search_clause(self.q, Task.title, Task.description)
        if search is not None:
            clauses.append(search)
        if self.status:
            clauses.append(Task.status == self.status)
        if self.is_archived is not None:
            clauses.append(Task.is_archived == self.is_archived)
        if self.due_from:
            clauses.append(Task.due_date >= self.due_from)
        if self.due_to:
            clauses.append(Task.due_date <= self.due_to)
        return clauses


class MyTaskFilters(TaskFilters):
    def __init__(
        self,
        q: Optional[str] = None,
        status: Optional[str] = None,
        is_archived: Optional[str] = None,
        projectId: Optional[str] = None,
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
    ):
        super().__init__(q=q, status=status, is_archived=is_archived, due_from=due_from, due_to=due_to)
        self.project_id = parse_optional_uuid(projectId, "projectId")

    def clauses(self) -> list:
        clauses = super().clauses()
        if self.project_id:
            clauses.append(Task.project_id == self.project_id)
        return clauses


class NotificationFilters:
    def __init__(
        self,
        is_read: Optional[str] = None,
        type: Optional[str] = None,
        project_id: Optional[str] = None,
        task_id: Optional[str] = None,
    ):
        self.is_read = parse_bool_flag(is_read)
        self.type = _clean(type)
        self.project_id = parse_optional_uuid(project_id, "project_id")
        self.task_id = parse_optional_uuid(task_id, "task_id")

    def clauses(self) -> list:
        clauses = []
        if self.is_read is not None:
            clauses.append(Notification.is_read == self.is_read)
        if self.type:
            clauses.append(Notification.type == self.type)
        if self.project_id:
            clauses.append(Notification.project_id == self.project_id)
        if self.task_id:
            clauses.append(Notification.task_id == self.task_id)
        return clauses


class UserFilters:
    def __init__(self, q: Optional[str] = None):
        self.q = q

    def clauses(self) -> list:
        clauses = [User.is_active.is_(True)]
        search = search_clause(self.q, User.full_name, User.email)
        if search is not None:
            clauses.append(search)
        return clauses
