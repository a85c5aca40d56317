from tests.conftest import API


def _contribution(client, project_id, partner_id, **overrides):
    payload = {"partner_id": partner_id, "year": 2024, "planned_contribution": "500000.00"}
    payload.update(overrides)
    return client.post(f"{API}/projects/{project_id}/partners", json=payload)


# -----------------------------
# Partenaires
# -----------------------------

def test_partners_are_listed_by_name(user_client, create_partner):
    create_partner(name="Ministère de l'Intérieur", type="Administration centrale")
    create_partner(name="Agence de l'Oriental", type="Établissement public")
    names = [p["name"] for p in user_client.get(f"{API}/partners").json()]
    assert names == ["Agence de l'Oriental", "Ministère de l'Intérieur"]


def test_partner_update_and_missing_partner(user_client, create_partner):
    partner = create_partner()
    res = user_client.put(f"{API}/partners/{partner['id']}", json={"type": "Région"})
    assert res.status_code == 200
    assert res.json()["type"] == "Région"
    assert user_client.get(f"{API}/partners/9999").status_code == 404


# -----------------------------
# Contributions projet ↔ partenaire
# -----------------------------

def test_project_partners_are_joined_with_partner(user_client, create_project, create_partner):
    project = create_project()
    partner = create_partner()
    res = _contribution(user_client, project["id"], partner["id"], actual_contribution="100000.00")
    assert res.status_code == 201
    link = res.json()
    assert link["status"] == "pending"

    joined = user_client.get(f"{API}/projects/{project['id']}/partners").json()
    assert joined == [{"project_partner": link, "partner": partner}]


def test_contributions_are_ordered_by_year(user_client, create_project, create_partner):
    project = create_project()
    partner = create_partner()
    _contribution(user_client, project["id"], partner["id"], year=2025)
    _contribution(user_client, project["id"], partner["id"], year=2023)
    years = [row["project_partner"]["year"] for row in user_client.get(f"{API}/projects/{project['id']}/partners").json()]
    assert years == [2023, 2025]


def test_duplicate_contribution_rows_are_accepted(user_client, create_project, create_partner):
    # aucune contrainte d'unicité sur (projet, partenaire, année)
    project = create_project()
    partner = create_partner()
    assert _contribution(user_client, project["id"], partner["id"]).status_code == 201
    assert _contribution(user_client, project["id"], partner["id"]).status_code == 201
    assert len(user_client.get(f"{API}/projects/{project['id']}/partners").json()) == 2


def test_contribution_requires_existing_parents(user_client, create_project, create_partner):
    project = create_project()
    partner = create_partner()
    missing_project = _contribution(user_client, 9999, partner["id"])
    missing_partner = _contribution(user_client, project["id"], 9999)
    assert missing_project.status_code == 404
    assert missing_project.json() == {"message": "Project not found"}
    assert missing_partner.status_code == 404
    assert missing_partner.json() == {"message": "Partner not found"}


def test_contribution_year_is_validated(user_client, create_project, create_partner):
    res = _contribution(user_client, create_project()["id"], create_partner()["id"], year=1800)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "year"


def test_partner_delete_is_blocked_until_contribution_removed(user_client, create_project, create_partner):
    project = create_project()
    partner = create_partner()
    link = _contribution(user_client, project["id"], partner["id"]).json()

    res = user_client.delete(f"{API}/partners/{partner['id']}")
    assert res.status_code == 409
    assert res.json() == {"message": "Partner is still linked to projects"}

    update = user_client.put(f"{API}/project-partners/{link['id']}", json={"status": "paid"})
    assert update.json()["status"] == "paid"

    assert user_client.delete(f"{API}/project-partners/{link['id']}").status_code == 204
    assert user_client.delete(f"{API}/project-partners/{link['id']}").status_code == 404
    assert user_client.delete(f"{API}/partners/{partner['id']}").status_code == 204


# -----------------------------
# Conventions
# -----------------------------

def test_programme_catalog(user_client):
    res = user_client.get(f"{API}/conventions/programmes")
    assert res.status_code == 200
    assert "Programme de Développement Régional Oriental 2022-2027" in res.json()["programmes"]


def test_conventions_are_newest_first(user_client, create_convention):
    create_convention(title="Première")
    create_convention(title="Seconde")
    titles = [c["title"] for c in user_client.get(f"{API}/conventions").json()]
    assert titles == ["Seconde", "Première"]


def test_convention_status_is_validated(user_client):
    res = user_client.post(
        f"{API}/conventions",
        json={"title": "X", "status": "archived", "programme": "Libre"},
    )
    assert res.status_code == 400


def test_convention_nullable_fields_can_be_cleared(user_client, create_convention):
    convention = create_convention(status="visa", date_visa="2024-01-15", document_url="https://example.org/c.pdf")
    res = user_client.put(f"{API}/conventions/{convention['id']}", json={"date_visa": None, "document_url": None})
    assert res.status_code == 200
    assert res.json()["date_visa"] is None
    assert res.json()["document_url"] is None

    res = user_client.put(f"{API}/conventions/{convention['id']}", json={"title": None})
    assert res.status_code == 400


def test_convention_project_joins_both_ways(user_client, create_project, create_convention):
    project = create_project()
    convention = create_convention()
    res = user_client.post(f"{API}/conventions/{convention['id']}/projects", json={"project_id": project["id"]})
    assert res.status_code == 201
    link = res.json()

    by_convention = user_client.get(f"{API}/conventions/{convention['id']}/projects").json()
    assert by_convention == [{"convention_project": link, "project": project}]

    by_project = user_client.get(f"{API}/projects/{project['id']}/conventions").json()
    assert by_project == [{"convention_project": link, "convention": convention}]


def test_link_to_missing_project_is_404(user_client, create_convention):
    convention = create_convention()
    res = user_client.post(f"{API}/conventions/{convention['id']}/projects", json={"project_id": 9999})
    assert res.status_code == 404
    assert user_client.get(f"{API}/conventions/9999/projects").status_code == 404


def test_convention_delete_is_restricted(user_client, create_project, create_convention):
    project = create_project()
    convention = create_convention()
    link = user_client.post(
        f"{API}/conventions/{convention['id']}/projects", json={"project_id": project["id"]}
    ).json()

    assert user_client.delete(f"{API}/conventions/{convention['id']}").status_code == 409
    assert user_client.delete(f"{API}/projects/{project['id']}").status_code == 409

    assert user_client.delete(f"{API}/convention-projects/{link['id']}").status_code == 204
    assert user_client.delete(f"{API}/conventions/{convention['id']}").status_code == 204
    assert user_client.delete(f"{API}/projects/{project['id']}").status_code == 204


# -----------------------------
# Avances financières
# -----------------------------

def test_financial_advances_newest_reference_first(user_client, create_project):
    project = create_project()
    url = f"{API}/projects/{project['id']}/financial-advances"
    user_client.post(url, json={"reference_date": "2024-03-31", "engagement": "100.00", "payment": "50.00"})
    user_client.post(url, json={"reference_date": "2024-09-30", "engagement": "200.00", "payment": "80.00"})

    dates = [a["reference_date"] for a in user_client.get(url).json()]
    assert dates == ["2024-09-30", "2024-03-31"]


def test_financial_advance_does_not_touch_project_totals(user_client, create_project):
    project = create_project()
    user_client.post(
        f"{API}/projects/{project['id']}/financial-advances",
        json={"reference_date": "2024-03-31", "engagement": "999.00", "payment": "999.00"},
    )
    after = user_client.get(f"{API}/projects/{project['id']}").json()
    assert after["engagements"] == project["engagements"]
    assert after["payments"] == project["payments"]


def test_financial_advance_update_and_delete(user_client, create_project):
    project = create_project()
    advance = user_client.post(
        f"{API}/projects/{project['id']}/financial-advances",
        json={"reference_date": "2024-03-31", "engagement": "100.00", "payment": "50.00"},
    ).json()

    res = user_client.put(f"{API}/financial-advances/{advance['id']}", json={"payment": "75.25"})
    assert res.status_code == 200
    assert res.json()["payment"] == "75.25"
    assert res.json()["engagement"] == "100.00"

    assert user_client.delete(f"{API}/financial-advances/{advance['id']}").status_code == 204
    assert user_client.put(f"{API}/financial-advances/{advance['id']}", json={"payment": "1.00"}).status_code == 404


def test_financial_advances_of_missing_project_is_404(user_client):
    assert user_client.get(f"{API}/projects/9999/financial-advances").status_code == 404
