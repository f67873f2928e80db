def test_register_creates_account_and_empty_profile(client, make_user):
    user_id, headers, _ = make_user("alice@example.com", "Alice")

    me = client.get("/users/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["id"] == user_id
    assert me.json()["email"] == "alice@example.com"
    assert "password_hash" not in me.json()

    profile = client.get("/profiles/me", headers=headers)
    assert profile.status_code == 200
    body = profile.json()
    assert body["id"] == user_id
    assert body["full_name"] == "Alice"
    assert body["skills"] == []


def test_register_duplicate_email(client, make_user):
    make_user("bob@example.com")
    res = client.post("/auth/register", json={"email": "bob@example.com", "password": "password123"})
    assert res.status_code == 400


def test_register_rejects_weak_password(client):
    res = client.post("/auth/register", json={"email": "weak@example.com", "password": "short"})
    assert res.status_code == 422
    res = client.post("/auth/register", json={"email": "weak@example.com", "password": "onlyletters"})
    assert res.status_code == 422


def test_login_with_wrong_password(client, make_user):
    make_user("carol@example.com")
    res = client.post("/auth/token", data={"username": "carol@example.com", "password": "wrongpass1"})
    assert res.status_code == 401


def test_protected_routes_require_token(client):
    assert client.get("/users/me").status_code == 401
    assert client.get("/projects/my").status_code == 401
    res = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
