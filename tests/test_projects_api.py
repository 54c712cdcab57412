"""
Tests for projects and project membership.
"""

import uuid

from synergysphere.models import User

MISSING_ID = "6f1c2a4e-1b2c-4d3e-8f90-1234567890ab"


def test_create_and_get_project(client, register, project_factory):
    _, headers = register("owner@example.com")
    project = project_factory(headers, name="Apollo", description="Moon")
    assert project["status"] == "active"

    response = client.get(f"/projects/{project['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Apollo"
    assert response.json()["role"] == "owner"


def test_create_project_requires_name(client, register):
    _, headers = register("owner@example.com")
    response = client.post("/projects", json={"name": "  "}, headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "name is required"


def test_invalid_status_is_rejected(client, register):
    _, headers = register("owner@example.com")
    response = client.post("/projects", json={"name": "X", "status": "sleeping"}, headers=headers)
    assert response.status_code == 400


def test_invalid_project_id(client, register):
    _, headers = register("owner@example.com")
    response = client.get("/projects/123", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid projectId"


def test_project_id_with_trailing_newline_is_rejected(client, register, project_factory):
    _, headers = register("owner@example.com")
    project = project_factory(headers)
    response = client.get(f"/projects/{project['id']}%0A", headers=headers)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid projectId"


def test_page_far_past_the_end_is_empty(client, register, project_factory):
    _, headers = register("owner@example.com")
    project_factory(headers)
    response = client.get("/projects", params={"page": "99999999999999999999"}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["items"] == []
    assert body["total"] == 1
    assert body["hasNext"] is False


def test_deleted_account_cannot_create_projects(client, register):
    user, headers = register("gone@example.com")

    with client.app.state.database.session() as db:
        db.query(User).filter(User.id == uuid.UUID(user["id"])).delete(synchronize_session=False)
        db.commit()

    response = client.post("/projects", json={"name": "Orphan"}, headers=headers)
    assert response.status_code == 401
    assert response.json()["error_code"] == "UNAUTHORIZED"


def test_outsider_gets_404_until_added(client, register, project_factory, add_member):
    _, owner_headers = register("owner@example.com")
    bob, bob_headers = register("bob@example.com")
    project = project_factory(owner_headers)

    assert client.get(f"/projects/{project['id']}", headers=bob_headers).status_code == 404
    assert client.get(f"/projects/{MISSING_ID}", headers=bob_headers).status_code == 404

    add_member(project["id"], bob["id"], owner_headers)

    response = client.get(f"/projects/{project['id']}", headers=bob_headers)
    assert response.status_code == 200
    assert response.json()["role"] == "member"


def test_list_projects_includes_owned_and_member_projects(client, register, project_factory, add_member):
    _, owner_headers = register("owner@example.com")
    bob, bob_headers = register("bob@example.com")
    shared = project_factory(owner_headers, name="Shared")
    project_factory(owner_headers, name="Private")
    own = project_factory(bob_headers, name="Bob's")
    add_member(shared["id"], bob["id"], owner_headers, role="viewer")

    response = client.get("/projects", params={"sort": "name", "order": "asc"}, headers=bob_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert [(p["id"], p["role"]) for p in body["items"]] == [
        (own["id"], "owner"),
        (shared["id"], "viewer"),
    ]


def test_list_projects_filters_and_envelope(client, register, project_factory):
    _, headers = register("owner@example.com")
    for i in range(5):
        project_factory(headers, name=f"Project {i}", status="paused" if i % 2 else "active")

    paused = client.get("/projects", params={"status": "paused"}, headers=headers).json()
    assert paused["total"] == 2

    searched = client.get("/projects", params={"q": "project 3"}, headers=headers).json()
    assert [p["name"] for p in searched["items"]] == ["Project 3"]

    page = client.get("/projects", params={"limit": "2", "page": "2"}, headers=headers).json()
    assert page["limit"] == 2
    assert page["total"] == 5
    assert page["totalPages"] == 3
    assert page["hasPrev"] is True
    assert page["hasNext"] is True
    assert len(page["items"]) == 2

    clamped = client.get("/projects", params={"limit": "1000", "page": "abc"}, headers=headers).json()
    assert clamped["limit"] == 100
    assert clamped["page"] == 1


def test_update_and_delete_are_creator_only(client, register, project_factory, add_member):
    _, owner_headers = register("owner@example.com")
    admin, admin_headers = register("admin@example.com")
    project = project_factory(owner_headers)
    add_member(project["id"], admin["id"], owner_headers, role="admin")

    denied = client.patch(f"/projects/{project['id']}", json={"name": "Hijack"}, headers=admin_headers)
    assert denied.status_code == 404
    assert client.delete(f"/projects/{project['id']}", headers=admin_headers).status_code == 404

    updated = client.patch(
        f"/projects/{project['id']}",
        json={"name": "Renamed", "status": "completed"},
        headers=owner_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Renamed"
    assert updated.json()["status"] == "completed"

    empty = client.patch(f"/projects/{project['id']}", json={}, headers=owner_headers)
    assert empty.status_code == 400

    assert client.delete(f"/projects/{project['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=owner_headers).status_code == 404
    assert client.get(f"/projects/{project['id']}/members", headers=admin_headers).status_code == 404


def test_member_management(client, register, project_factory, add_member):
    _, owner_headers = register("owner@example.com")
    admin, admin_headers = register("admin@example.com")
    bob, bob_headers = register("bob@example.com")
    project = project_factory(owner_headers)
    base = f"/projects/{project['id']}/members"

    add_member(project["id"], admin["id"], owner_headers, role="admin")

    # admins may add members but not grant owner
    added = client.post(base, json={"userId": bob["id"]}, headers=admin_headers)
    assert added.status_code == 201
    assert added.json()["role"] == "member"
    assert added.json()["email"] == "bob@example.com"

    owner_grant = client.patch(f"{base}/{bob['id']}", json={"role": "owner"}, headers=admin_headers)
    assert owner_grant.status_code == 403

    # plain members cannot manage
    assert client.patch(f"{base}/{admin['id']}", json={"role": "viewer"}, headers=bob_headers).status_code == 403

    listing = client.get(base, headers=bob_headers)
    assert listing.status_code == 200
    assert listing.json()["total"] == 2

    me = client.get(f"{base}/me", headers=bob_headers)
    assert me.status_code == 200
    assert me.json()["user_id"] == bob["id"]
    assert client.get(f"{base}/{admin['id']}", headers=bob_headers).json()["role"] == "admin"

    demoted = client.patch(f"{base}/{bob['id']}", json={"role": "viewer"}, headers=admin_headers)
    assert demoted.status_code == 200
    assert demoted.json()["role"] == "viewer"

    # members may remove themselves
    assert client.delete(f"{base}/{bob['id']}", headers=bob_headers).status_code == 204
    assert client.get(f"/projects/{project['id']}", headers=bob_headers).status_code == 404


def test_add_member_errors(client, register, project_factory):
    _, owner_headers = register("owner@example.com")
    project = project_factory(owner_headers)
    base = f"/projects/{project['id']}/members"

    assert client.post(base, json={"userId": MISSING_ID}, headers=owner_headers).status_code == 404
    assert client.post(base, json={"userId": "nope"}, headers=owner_headers).status_code == 400
    assert client.post(base, json={}, headers=owner_headers).status_code == 400
    assert client.get(f"{base}/me", headers=owner_headers).status_code == 404
    assert client.delete(f"{base}/{MISSING_ID}", headers=owner_headers).status_code == 404


def test_adding_member_notifies_them(client, register, project_factory, add_member):
    _, owner_headers = register("owner@example.com")
    bob, bob_headers = register("bob@example.com")
    project = project_factory(owner_headers, name="Apollo")
    add_member(project["id"], bob["id"], owner_headers)

    items = client.get("/notifications", headers=bob_headers).json()["items"]
    assert len(items) == 1
    assert items[0]["type"] == "project_member_added"
    assert items[0]["payload"]["project_name"] == "Apollo"
    assert items[0]["actor_email"] == "owner@example.com"
