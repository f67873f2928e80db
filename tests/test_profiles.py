def test_update_profile_dedupes_skills(client, make_user):
    _, headers, _ = make_user("dana@example.com", "Dana")
    res = client.put(
        "/profiles/me",
        json={
            "bio": "CS junior",
            "hourly_rate": 25,
            "skills": ["Python", "React", "Python", " "],
            "is_student": True,
            "institution": "State University",
            "graduation_year": 2027,
        },
        headers=headers,
    )
    assert res.status_code == 200, res.text
    body = res.json()
    assert body["skills"] == ["Python", "React"]
    assert body["hourly_rate"] == 25
    assert body["is_student"] is True
    # fields not sent stay untouched
    assert body["full_name"] == "Dana"


def test_negative_hourly_rate_rejected(client, make_user):
    _, headers, _ = make_user("erin@example.com")
    res = client.put("/profiles/me", json={"hourly_rate": -1}, headers=headers)
    assert res.status_code == 422


def test_public_profile(client, make_user):
    user_id, _, _ = make_user("frank@example.com", "Frank")
    _, viewer_headers, _ = make_user("gina@example.com")

    res = client.get(f"/profiles/{user_id}", headers=viewer_headers)
    assert res.status_code == 200
    assert res.json()["full_name"] == "Frank"

    assert client.get("/profiles/unknown-id", headers=viewer_headers).status_code == 404


def test_avatar_upload(client, make_user):
    user_id, headers, _ = make_user("hank@example.com")
    res = client.post(
        "/profiles/me/avatar",
        files={"file": ("me.png", b"\x89PNG fake image bytes", "image/png")},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    avatar_url = res.json()["avatar_url"]
    assert avatar_url.startswith(f"/storage/avatars/{user_id}/")
    assert avatar_url.endswith(".png")

    # served back by the static mount
    download = client.get(avatar_url)
    assert download.status_code == 200
    assert download.content == b"\x89PNG fake image bytes"


def test_avatar_upload_rejects_non_images(client, make_user):
    _, headers, _ = make_user("ivy@example.com")
    res = client.post(
        "/profiles/me/avatar",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert res.status_code == 400
