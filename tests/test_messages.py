import pytest
from starlette.websockets import WebSocketDisconnect


def test_parties_exchange_messages(client, assigned_project):
    pid = assigned_project["project_id"]
    c_headers = assigned_project["client_headers"]
    f_headers = assigned_project["freelancer_headers"]

    res = client.post(f"/messages/{pid}", json={"content": "  Hi, welcome aboard  "}, headers=c_headers)
    assert res.status_code == 201, res.text
    assert res.json()["content"] == "Hi, welcome aboard"
    assert res.json()["sender_id"] == assigned_project["client_id"]

    client.post(f"/messages/{pid}", json={"content": "Thanks!"}, headers=f_headers)

    res = client.get(f"/messages/{pid}", headers=f_headers)
    assert res.status_code == 200
    assert [m["content"] for m in res.json()] == ["Hi, welcome aboard", "Thanks!"]
    assert res.json()[1]["sender"]["full_name"] == "Fred Freelancer"


def test_empty_message_rejected(client, assigned_project):
    pid = assigned_project["project_id"]
    res = client.post(f"/messages/{pid}", json={"content": "   "}, headers=assigned_project["client_headers"])
    assert res.status_code == 422


def test_outsiders_cannot_read_or_write(client, make_user, assigned_project):
    pid = assigned_project["project_id"]
    _, outsider_headers, _ = make_user("outsider@example.com")
    assert client.get(f"/messages/{pid}", headers=outsider_headers).status_code == 403
    assert client.post(f"/messages/{pid}", json={"content": "hey"}, headers=outsider_headers).status_code == 403
    assert client.get("/messages/missing", headers=outsider_headers).status_code == 404


def test_no_messages_before_assignment(client, make_user, create_project):
    _, headers, _ = make_user("client@example.com")
    project = create_project(headers)
    res = client.post(f"/messages/{project['id']}", json={"content": "anyone?"}, headers=headers)
    assert res.status_code == 400


def test_conversations_list_assigned_projects(client, make_user, create_project, assigned_project):
    # an open project of the same client is not a conversation
    create_project(assigned_project["client_headers"], title="Still open")
    for headers in (assigned_project["client_headers"], assigned_project["freelancer_headers"]):
        res = client.get("/messages/conversations", headers=headers)
        assert res.status_code == 200
        assert [c["id"] for c in res.json()] == [assigned_project["project_id"]]

    _, outsider_headers, _ = make_user("outsider@example.com")
    assert client.get("/messages/conversations", headers=outsider_headers).json() == []


def test_websocket_broadcasts_new_message(client, assigned_project):
    pid = assigned_project["project_id"]
    token = assigned_project["freelancer_token"]

    with client.websocket_connect(f"/messages/ws/{pid}?token={token}") as ws:
        ws.send_text('{"content": "pushed over websocket"}')
        payload = ws.receive_json()
        assert payload["content"] == "pushed over websocket"
        assert payload["sender_id"] == assigned_project["freelancer_id"]
        assert payload["project_id"] == pid

        ws.send_text("not json")
        error = ws.receive_json()
        assert error["type"] == "error"

    history = client.get(f"/messages/{pid}", headers=assigned_project["client_headers"]).json()
    assert [m["content"] for m in history] == ["pushed over websocket"]


def test_websocket_rejects_outsiders(client, make_user, assigned_project):
    _, _, outsider_token = make_user("outsider@example.com")
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect(
            f"/messages/ws/{assigned_project['project_id']}?token={outsider_token}"
        ) as ws:
            ws.receive_text()
