from pathlib import Path

from collabhub.core.config import settings


def _item_payload(**overrides):
    payload = {
        "title": "Calculus textbook",
        "description": "8th edition, a few highlights",
        "price": 35,
        "category": "Textbooks",
        "condition": "good",
        "location": "North campus",
        "images": [],
    }
    payload.update(overrides)
    return payload


def test_list_and_sell_item(client, make_user):
    seller_id, seller_headers, _ = make_user("seller@example.com", "Sam Seller")
    buyer_id, buyer_headers, _ = make_user("buyer@example.com")

    res = client.post("/marketplace/items", json=_item_payload(), headers=seller_headers)
    assert res.status_code == 201, res.text
    item = res.json()
    assert item["status"] == "available"
    assert item["seller"]["full_name"] == "Sam Seller"

    listing = client.get("/marketplace/items", headers=buyer_headers).json()
    assert [i["id"] for i in listing] == [item["id"]]

    # only the seller can mark it sold
    res = client.patch(f"/marketplace/items/{item['id']}/sold", json={}, headers=buyer_headers)
    assert res.status_code == 403

    res = client.patch(
        f"/marketplace/items/{item['id']}/sold", json={"buyer_id": buyer_id}, headers=seller_headers
    )
    assert res.status_code == 200
    assert res.json()["status"] == "sold"
    assert res.json()["buyer_id"] == buyer_id

    # sold items leave the public listing but stay in "my items"
    assert client.get("/marketplace/items", headers=buyer_headers).json() == []
    mine = client.get("/marketplace/items/my", headers=seller_headers).json()
    assert [i["status"] for i in mine] == ["sold"]

    res = client.patch(f"/marketplace/items/{item['id']}/sold", json={}, headers=seller_headers)
    assert res.status_code == 400


def test_seller_cannot_be_buyer(client, make_user):
    seller_id, seller_headers, _ = make_user("seller@example.com")
    item = client.post("/marketplace/items", json=_item_payload(), headers=seller_headers).json()
    res = client.patch(
        f"/marketplace/items/{item['id']}/sold", json={"buyer_id": seller_id}, headers=seller_headers
    )
    assert res.status_code == 400


def test_item_validation(client, make_user):
    _, headers, _ = make_user("seller@example.com")
    assert client.post("/marketplace/items", json=_item_payload(category="Pets"), headers=headers).status_code == 422
    assert client.post("/marketplace/items", json=_item_payload(condition="broken"), headers=headers).status_code == 422
    assert client.post("/marketplace/items", json=_item_payload(price=-5), headers=headers).status_code == 422
    too_many = [f"/storage/marketplace-images/x/{i}.png" for i in range(6)]
    assert client.post("/marketplace/items", json=_item_payload(images=too_many), headers=headers).status_code == 422


def test_search_and_category_filter(client, make_user):
    _, headers, _ = make_user("seller@example.com")
    book = client.post("/marketplace/items", json=_item_payload(), headers=headers).json()
    lamp = client.post(
        "/marketplace/items",
        json=_item_payload(title="Desk lamp", description="LED", category="Dorm Items"),
        headers=headers,
    ).json()

    res = client.get("/marketplace/items", params={"search": "calculus"}, headers=headers)
    assert [i["id"] for i in res.json()] == [book["id"]]
    res = client.get("/marketplace/items", params={"category": "Dorm Items"}, headers=headers)
    assert [i["id"] for i in res.json()] == [lamp["id"]]
    assert client.get("/marketplace/items/missing", headers=headers).status_code == 404


def test_categories_endpoint(client, make_user):
    _, headers, _ = make_user("seller@example.com")
    body = client.get("/marketplace/categories", headers=headers).json()
    assert "Textbooks" in body["categories"]
    assert body["conditions"] == ["new", "like_new", "good", "fair", "poor"]


def test_image_upload_and_delete(client, make_user):
    user_id, headers, _ = make_user("seller@example.com")
    _, other_headers, _ = make_user("other@example.com")

    res = client.post(
        "/marketplace/images",
        files=[
            ("files", ("a.jpg", b"jpeg bytes", "image/jpeg")),
            ("files", ("b.png", b"png bytes", "image/png")),
        ],
        headers=headers,
    )
    assert res.status_code == 201, res.text
    urls = res.json()["urls"]
    assert len(urls) == 2
    assert all(u.startswith(f"/storage/marketplace-images/marketplace/{user_id}/") for u in urls)
    assert client.get(urls[0]).content == b"jpeg bytes"

    # someone else's upload
    res = client.delete("/marketplace/images", params={"path": urls[0]}, headers=other_headers)
    assert res.status_code == 403

    res = client.delete("/marketplace/images", params={"path": urls[0]}, headers=headers)
    assert res.status_code == 204
    assert client.get(urls[0]).status_code == 404

    res = client.delete("/marketplace/images", params={"path": urls[0]}, headers=headers)
    assert res.status_code == 404


def test_image_upload_limits(client, make_user):
    _, headers, _ = make_user("seller@example.com")
    files = [("files", (f"{i}.png", b"x", "image/png")) for i in range(6)]
    assert client.post("/marketplace/images", files=files, headers=headers).status_code == 400

    res = client.post(
        "/marketplace/images",
        files=[("files", ("doc.pdf", b"%PDF", "application/pdf"))],
        headers=headers,
    )
    assert res.status_code == 400

    res = client.post(
        "/marketplace/images",
        files=[("files", ("../../escape.png", b"x", "image/png"))],
        headers=headers,
    )
    # the stored name is generated, so the client-supplied path is ignored
    assert res.status_code == 201
    assert ".." not in res.json()["urls"][0]


def test_mixed_upload_stores_nothing(client, make_user):
    user_id, headers, _ = make_user("seller@example.com")
    res = client.post(
        "/marketplace/images",
        files=[
            ("files", ("ok.png", b"png bytes", "image/png")),
            ("files", ("notes.txt", b"plain text", "text/plain")),
        ],
        headers=headers,
    )
    assert res.status_code == 400

    user_folder = Path(settings.STORAGE_ROOT) / "marketplace-images" / "marketplace" / user_id
    assert not user_folder.exists() or not any(user_folder.iterdir())
