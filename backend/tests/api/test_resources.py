"""Resources routes — catalogue list, create with defaults, delete by path id.

Invariants:
    - Optional fields default to description="" and type/platform="Otro"
    - title and url are required after trimming
    - DELETE /api/resources/{id}: unparsable → 400, missing → 404
"""


async def test_list_resources_empty(client):
    res = await client.get("/api/resources")
    assert res.status_code == 200
    assert res.json() == []


async def test_create_resource_applies_defaults(client):
    res = await client.post(
        "/api/resources", json={"title": "A", "url": "http://x"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "A"
    assert body["url"] == "http://x"
    assert body["type"] == "Otro"
    assert body["platform"] == "Otro"
    assert body["description"] == ""
    assert body["created_at"]


async def test_create_resource_trims_fields(client):
    res = await client.post("/api/resources", json={
        "title": "  Intro to SQL ",
        "url": " https://example.com/sql ",
        "description": "  basics  ",
        "type": " Video ",
        "platform": " YouTube ",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Intro to SQL"
    assert body["url"] == "https://example.com/sql"
    assert body["description"] == "basics"
    assert body["type"] == "Video"
    assert body["platform"] == "YouTube"


async def test_created_resource_listed_once_with_defaults(client):
    created = (await client.post(
        "/api/resources", json={"title": "A", "url": "http://x"},
    )).json()
    listed = (await client.get("/api/resources")).json()
    matches = [r for r in listed if r["id"] == created["id"]]
    assert len(matches) == 1
    assert matches[0]["type"] == "Otro"
    assert matches[0]["description"] == ""


async def test_list_resources_newest_first(client):
    first = (await client.post(
        "/api/resources", json={"title": "one", "url": "http://1"},
    )).json()
    second = (await client.post(
        "/api/resources", json={"title": "two", "url": "http://2"},
    )).json()
    ids = [r["id"] for r in (await client.get("/api/resources")).json()]
    assert ids == [second["id"], first["id"]]


async def test_create_resource_missing_url_returns_400(client):
    res = await client.post("/api/resources", json={"title": "A"})
    assert res.status_code == 400
    assert res.json()["error"] == "url is required"
    assert (await client.get("/api/resources")).json() == []


async def test_create_resource_blank_title_returns_400(client):
    res = await client.post(
        "/api/resources", json={"title": "   ", "url": "http://x"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "title is required and cannot be empty"


async def test_delete_resource(client):
    created = (await client.post(
        "/api/resources", json={"title": "A", "url": "http://x"},
    )).json()
    res = await client.delete(f"/api/resources/{created['id']}")
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert (await client.get("/api/resources")).json() == []


async def test_delete_resource_invalid_id_returns_400(client):
    res = await client.delete("/api/resources/abc")
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


async def test_delete_missing_resource_returns_404(client):
    await client.post("/api/resources", json={"title": "A", "url": "http://x"})
    res = await client.delete("/api/resources/999")
    assert res.status_code == 404
    assert res.json()["error"] == "Resource 999 not found"
    assert len((await client.get("/api/resources")).json()) == 1


async def test_delete_resource_id_beyond_integer_range_returns_404(client):
    await client.post("/api/resources", json={"title": "A", "url": "http://x"})
    res = await client.delete("/api/resources/99999999999999999999")
    assert res.status_code == 404
    assert res.json()["code"] == "NOT_FOUND"
    assert len((await client.get("/api/resources")).json()) == 1
