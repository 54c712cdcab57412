"""
Filter objects only build SQLAlchemy expressions, so they are checked
by compiling the clauses without a database.
"""

from datetime import date

import pytest

from synergysphere.exceptions import BaseAPIException
from synergysphere.utils.filters import (
    MyTaskFilters, NotificationFilters, ProjectFilters, TaskFilters, UserFilters,
    parse_bool_flag, search_clause,
)
from synergysphere.models import Project


def compiled(clauses, literal=True):
    kwargs = {"compile_kwargs": {"literal_binds": True}} if literal else {}
    return [str(clause.compile(**kwargs)) for clause in clauses]


def test_parse_bool_flag():
    assert parse_bool_flag(None) is None
    assert parse_bool_flag("true") is True
    assert parse_bool_flag("TRUE") is True
    assert parse_bool_flag("false") is False
    assert parse_bool_flag("yes") is False


def test_search_clause_ignores_blank_terms():
    assert search_clause(None, Project.name) is None
    assert search_clause("   ", Project.name) is None


def test_search_clause_matches_any_column():
    sql = str(search_clause("apollo", Project.name, Project.description))
    assert "projects.name" in sql
    assert "projects.description" in sql
    assert " OR " in sql


def test_project_filters_empty():
    assert ProjectFilters().clauses() == []


def test_project_filters():
    sql = compiled(ProjectFilters(q="moon", status="active").clauses())
    assert len(sql) == 2
    assert "'%moon%'" in sql[0]
    assert sql[1] == "projects.status = 'active'"


def test_task_filters():
    filters = TaskFilters(
        status="done",
        is_archived="false",
        due_from=date(2024, 1, 1),
        due_to=date(2024, 12, 31),
    )
    sql = compiled(filters.clauses(), literal=False)
    assert len(sql) == 4
    assert sql[0].startswith("tasks.status =")
    assert "tasks.is_archived" in sql[1]
    assert "tasks.due_date >=" in sql[2]
    assert "tasks.due_date <=" in sql[3]


def test_my_task_filters_project_id():
    filters = MyTaskFilters(projectId="6f1c2a4e-1b2c-4d3e-8f90-1234567890ab")
    sql = compiled(filters.clauses(), literal=False)
    assert len(sql) == 1
    assert sql[0].startswith("tasks.project_id =")


def test_my_task_filters_rejects_bad_project_id():
    with pytest.raises(BaseAPIException) as exc_info:
        MyTaskFilters(projectId="not-a-uuid")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid projectId"


def test_notification_filters():
    filters = NotificationFilters(is_read="false", type="task_assigned")
    sql = compiled(filters.clauses())
    assert len(sql) == 2
    assert "notifications.is_read" in sql[0]
    assert sql[1] == "notifications.type = 'task_assigned'"


def test_user_filters_always_limit_to_active_users():
    assert len(UserFilters().clauses()) == 1
    assert len(UserFilters(q="ann").clauses()) == 2
