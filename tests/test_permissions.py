"""
Tests for the role checks shared by every router.
"""

import pytest

from synergysphere.auth.permissions import (
    can_manage_project, can_modify_authored, can_view_project, get_project_role,
    has_project_role, require_project_access,
)
from synergysphere.database.session import Database, build_engine
from synergysphere.enums import ProjectRole
from synergysphere.exceptions import BaseAPIException
from synergysphere.models import Project, ProjectMember, User


@pytest.fixture
def db():
    database = Database(build_engine("sqlite:///:memory:"))
    database.create_all()
    session = database.session()
    yield session
    session.close()
    database.dispose()


def make_user(db, email):
    user = User(email=email, password_hash="x", full_name=email)
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def setup(db):
    owner = make_user(db, "owner@example.com")
    admin = make_user(db, "admin@example.com")
    viewer = make_user(db, "viewer@example.com")
    outsider = make_user(db, "outsider@example.com")

    project = Project(name="Apollo", created_by=owner.id)
    db.add(project)
    db.flush()
    db.add(ProjectMember(project_id=project.id, user_id=admin.id, role="admin"))
    db.add(ProjectMember(project_id=project.id, user_id=viewer.id, role="viewer"))
    db.flush()
    return project, owner, admin, viewer, outsider


def test_role_ranking():
    assert ProjectRole.OWNER.satisfies(ProjectRole.ADMIN)
    assert ProjectRole.ADMIN.satisfies(ProjectRole.ADMIN)
    assert ProjectRole.MEMBER.satisfies(ProjectRole.VIEWER)
    assert not ProjectRole.VIEWER.satisfies(ProjectRole.MEMBER)


def test_get_project_role(db, setup):
    project, owner, admin, viewer, outsider = setup
    assert get_project_role(db, project, owner.id) == ProjectRole.OWNER
    assert get_project_role(db, project, admin.id) == ProjectRole.ADMIN
    assert get_project_role(db, project, viewer.id) == ProjectRole.VIEWER
    assert get_project_role(db, project, outsider.id) is None


def test_view_and_manage(db, setup):
    project, owner, admin, viewer, outsider = setup
    assert can_view_project(db, project, viewer.id)
    assert not can_view_project(db, project, outsider.id)

    assert can_manage_project(db, project, owner.id)
    assert can_manage_project(db, project, admin.id)
    assert not can_manage_project(db, project, viewer.id)
    assert not has_project_role(db, project, outsider.id, ProjectRole.VIEWER)


def test_authors_can_always_modify_their_content(db, setup):
    project, owner, admin, viewer, outsider = setup
    assert can_modify_authored(db, project, viewer.id, viewer.id)
    assert can_modify_authored(db, project, admin.id, viewer.id)
    assert not can_modify_authored(db, project, viewer.id, admin.id)


def test_require_project_access_hides_project_from_outsiders(db, setup):
    project, owner, admin, viewer, outsider = setup
    with pytest.raises(BaseAPIException) as exc_info:
        require_project_access(db, project.id, outsider.id)
    assert exc_info.value.status_code == 404


def test_require_project_access_forbids_insufficient_role(db, setup):
    project, owner, admin, viewer, outsider = setup
    assert require_project_access(db, project.id, viewer.id) is project

    with pytest.raises(BaseAPIException) as exc_info:
        require_project_access(db, project.id, viewer.id, ProjectRole.ADMIN)
    assert exc_info.value.status_code == 403
