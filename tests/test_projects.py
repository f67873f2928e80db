def test_create_project_round_trip(client, make_user, create_project):
    client_id, headers, _ = make_user("client@example.com", "Carol")
    project = create_project(headers)

    assert project["status"] == "open"
    assert project["client_id"] == client_id
    assert project["freelancer_id"] is None

    res = client.get(f"/projects/{project['id']}", headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["budget_min"] == 100
    assert body["budget_max"] == 500
    assert set(body["skills_required"]) == {"React", "Node"}
    assert body["client"]["full_name"] == "Carol"


def test_budget_min_above_max_rejected(client, make_user):
    _, headers, _ = make_user("client@example.com")
    res = client.post(
        "/projects/",
        json={"title": "t", "description": "d", "budget_min": 600, "budget_max": 500},
        headers=headers,
    )
    assert res.status_code == 422


def test_unknown_project_is_404(client, make_user):
    _, headers, _ = make_user("client@example.com")
    assert client.get("/projects/does-not-exist", headers=headers).status_code == 404


def test_search_lists_open_projects_newest_first(client, make_user, create_project):
    _, headers, _ = make_user("client@example.com")
    first = create_project(headers, title="Logo design", description="Vector logo", category="Design")
    second = create_project(headers, title="Mobile app", description="Flutter app for the cafeteria")

    res = client.get("/projects/", headers=headers)
    assert [p["id"] for p in res.json()] == [second["id"], first["id"]]

    res = client.get("/projects/", params={"search": "FLUTTER"}, headers=headers)
    assert [p["id"] for p in res.json()] == [second["id"]]

    res = client.get("/projects/", params={"category": "Design"}, headers=headers)
    assert [p["id"] for p in res.json()] == [first["id"]]


def test_update_project_only_by_client_while_open(client, make_user, create_project, assigned_project):
    _, owner_headers, _ = make_user("owner@example.com")
    _, other_headers, _ = make_user("other@example.com")
    project = create_project(owner_headers)

    res = client.put(f"/projects/{project['id']}", json={"title": "New title"}, headers=other_headers)
    assert res.status_code == 403

    res = client.put(f"/projects/{project['id']}", json={"title": "New title"}, headers=owner_headers)
    assert res.status_code == 200
    assert res.json()["title"] == "New title"

    # only one side of the range sent, checked against the stored value
    res = client.put(f"/projects/{project['id']}", json={"budget_min": 1000}, headers=owner_headers)
    assert res.status_code == 400

    res = client.put(
        f"/projects/{assigned_project['project_id']}",
        json={"title": "Too late"},
        headers=assigned_project["client_headers"],
    )
    assert res.status_code == 400


def test_my_projects_include_application_count(client, make_user, create_project, apply_to):
    _, client_headers, _ = make_user("client@example.com")
    _, f1_headers, _ = make_user("f1@example.com")
    _, f2_headers, _ = make_user("f2@example.com")
    busy = create_project(client_headers, title="Busy")
    quiet = create_project(client_headers, title="Quiet")
    apply_to(busy["id"], f1_headers)
    apply_to(busy["id"], f2_headers)

    res = client.get("/projects/my", headers=client_headers)
    assert res.status_code == 200
    counts = {p["id"]: p["application_count"] for p in res.json()}
    assert counts == {busy["id"]: 2, quiet["id"]: 0}


def test_assigned_projects_for_freelancer(client, assigned_project):
    res = client.get("/projects/assigned", headers=assigned_project["freelancer_headers"])
    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [assigned_project["project_id"]]

    res = client.get("/projects/assigned", headers=assigned_project["client_headers"])
    assert res.json() == []


def test_project_recommendations(client, make_user, create_project):
    _, client_headers, _ = make_user("client@example.com")
    _, freelancer_headers, _ = make_user("freelancer@example.com")
    client.put("/profiles/me", json={"skills": ["react", "nodejs"]}, headers=freelancer_headers)

    match = create_project(client_headers, title="Match", skills_required=["React", "Node"])
    create_project(client_headers, title="No match", skills_required=["Photoshop"])
    # own projects are never recommended
    create_project(freelancer_headers, title="Mine", skills_required=["React"])

    res = client.get("/recommendations/projects", headers=freelancer_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 1
    assert body["items"][0]["project"]["id"] == match["id"]
    assert body["items"][0]["recommendation_score"] >= 1.0

    # a profile without skills gets nothing
    res = client.get("/recommendations/projects", headers=client_headers)
    assert res.json() == {"items": [], "total": 0}
