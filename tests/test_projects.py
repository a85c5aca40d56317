import pytest

from tests.conftest import API, project_payload


def test_create_then_get_returns_same_fields(user_client, create_project):
    created = create_project()
    assert created["id"] >= 1
    assert created["budget"] == "1500000.00"
    assert created["created_at"] and created["updated_at"]

    res = user_client.get(f"{API}/projects/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


def test_create_applies_defaults(user_client):
    payload = project_payload()
    for key in ("engagements", "payments", "physical_progress", "status"):
        del payload[key]
    res = user_client.post(f"{API}/projects", json=payload)
    assert res.status_code == 201
    project = res.json()
    assert project["engagements"] == "0.00"
    assert project["payments"] == "0.00"
    assert project["physical_progress"] == 0
    assert project["status"] == "active"


def test_unknown_fields_are_ignored(create_project):
    project = create_project(color="blue")
    assert "color" not in project


def test_duplicate_identifier_is_409_and_store_unchanged(user_client, create_project):
    create_project()
    res = user_client.post(f"{API}/projects", json=project_payload(title="Autre titre"))
    assert res.status_code == 409
    assert res.json() == {"message": "Project identifier already exists"}

    listed = user_client.get(f"{API}/projects").json()
    assert len(listed) == 1
    assert listed[0]["title"] == "Aménagement de la route RP 6012"


@pytest.mark.parametrize(
    "overrides,field",
    [
        ({"title": ""}, "title"),
        ({"title": "   "}, "title"),
        ({"budget": "abc"}, "budget"),
        ({"budget": "1.234"}, "budget"),
        ({"physical_progress": 101}, "physical_progress"),
        ({"status": "archived"}, "status"),
    ],
)
def test_invalid_payload_reports_field(user_client, overrides, field):
    res = user_client.post(f"{API}/projects", json=project_payload(**overrides))
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Invalid request data"
    assert field in [e["field"] for e in body["errors"]]


def test_missing_required_fields_are_all_reported(user_client):
    res = user_client.post(f"{API}/projects", json={"title": "Sans identifiant"})
    assert res.status_code == 400
    fields = {e["field"] for e in res.json()["errors"]}
    assert {"identifier", "axis", "domain", "region", "province", "commune", "budget"} <= fields


def test_get_missing_project_is_404(user_client):
    res = user_client.get(f"{API}/projects/9999")
    assert res.status_code == 404
    assert res.json() == {"message": "Project not found"}


def test_update_changes_only_sent_fields(user_client, create_project):
    project = create_project()
    res = user_client.put(f"{API}/projects/{project['id']}", json={"physical_progress": 55, "payments": "200000.50"})
    assert res.status_code == 200
    body = res.json()
    assert body["physical_progress"] == 55
    assert body["payments"] == "200000.50"
    assert body["title"] == project["title"]
    assert body["created_at"] == project["created_at"]
    assert body["updated_at"] >= project["updated_at"]


def test_update_missing_project_is_404(user_client):
    res = user_client.put(f"{API}/projects/9999", json={"title": "Nouveau"})
    assert res.status_code == 404


def test_update_with_same_identifier_is_accepted(user_client, create_project):
    project = create_project()
    res = user_client.put(
        f"{API}/projects/{project['id']}",
        json={"identifier": project["identifier"], "title": "Nouveau titre"},
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Nouveau titre"


def test_identifier_cannot_be_changed(user_client, create_project):
    project = create_project()
    res = user_client.put(f"{API}/projects/{project['id']}", json={"identifier": "PDR-OR-2099-999"})
    assert res.status_code == 400
    assert res.json()["errors"] == [{"field": "identifier", "message": "Project identifier cannot be changed"}]
    assert user_client.get(f"{API}/projects/{project['id']}").json()["identifier"] == project["identifier"]


def test_explicit_null_on_update_is_400(user_client, create_project):
    project = create_project()
    res = user_client.put(f"{API}/projects/{project['id']}", json={"title": None})
    assert res.status_code == 400
    assert res.json()["errors"] == [{"field": "title", "message": "Field cannot be null"}]


def test_default_listing_is_newest_first(user_client, create_project):
    for i in range(1, 4):
        create_project(identifier=f"PDR-{i}")
    listed = [p["identifier"] for p in user_client.get(f"{API}/projects").json()]
    assert listed == ["PDR-3", "PDR-2", "PDR-1"]


def test_sort_by_budget_desc_is_stable(user_client, create_project):
    create_project(identifier="A", budget="100.00")
    create_project(identifier="B", budget="300.00")
    create_project(identifier="C", budget="100.00")
    create_project(identifier="D", budget="300.00")

    res = user_client.get(f"{API}/projects", params={"sort_by": "budget", "sort_order": "desc"})
    assert res.status_code == 200
    assert [p["identifier"] for p in res.json()] == ["B", "D", "A", "C"]


def test_sort_by_defaults_to_ascending(user_client, create_project):
    create_project(identifier="B", title="Bravo")
    create_project(identifier="A", title="Alpha")
    res = user_client.get(f"{API}/projects", params={"sort_by": "title"})
    assert [p["title"] for p in res.json()] == ["Alpha", "Bravo"]


def test_unknown_sort_column_is_400(user_client):
    res = user_client.get(f"{API}/projects", params={"sort_by": "password"})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "sort_by"


def test_search_is_case_insensitive_on_title(user_client, create_project):
    create_project(identifier="R1", title="Route de Saïdia")
    create_project(identifier="E1", title="Station d'épuration")
    res = user_client.get(f"{API}/projects", params={"search": "route"})
    assert [p["identifier"] for p in res.json()] == ["R1"]


def test_delete_then_get_is_404(user_client, create_project):
    project = create_project()
    res = user_client.delete(f"{API}/projects/{project['id']}")
    assert res.status_code == 204
    assert res.content == b""
    assert user_client.get(f"{API}/projects/{project['id']}").status_code == 404
    assert user_client.delete(f"{API}/projects/{project['id']}").status_code == 404


def test_delete_with_dependents_is_409(user_client, create_project):
    project = create_project()
    user_client.post(
        f"{API}/projects/{project['id']}/financial-advances",
        json={"reference_date": "2024-06-30", "engagement": "10.00", "payment": "5.00"},
    )
    res = user_client.delete(f"{API}/projects/{project['id']}")
    assert res.status_code == 409
    assert user_client.get(f"{API}/projects/{project['id']}").status_code == 200
